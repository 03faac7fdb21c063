import unittest

from reportcards.core.entities import Mark, Student, Subject
from reportcards.core.scoring import load_grade_table
from reportcards.services.results_service import ResultsService, ResultsServiceError


class ResultsServiceTests(unittest.TestCase):
    def setUp(self):
        self.students = [Student("S1", "Asha", "1"), Student("S2", "Bilal", "2")]
        self.subjects = [Subject("math", "Math", 50)]
        self.marks = [Mark("S1", "math", 45), Mark("S2", "math", 10)]

    def test_rejects_unknown_policy(self):
        with self.assertRaises(ResultsServiceError):
            ResultsService(denominator_policy="weighted")
        service = ResultsService()
        with self.assertRaises(ResultsServiceError):
            service.compute(self.students, self.subjects, self.marks, policy="weighted")

    def test_report_cards(self):
        service = ResultsService()
        cards = service.report_cards(service.compute(self.students, self.subjects, self.marks))

        self.assertEqual(len(cards), 2)
        first, second = cards
        self.assertEqual(first["result"]["student_id"], "S1")
        self.assertEqual(first["position_label"], "1st")
        self.assertTrue(first["is_top3"])
        self.assertEqual(first["percentage_display"], "90.00%")
        self.assertEqual(first["remarks"], "Promoted to next class")
        self.assertEqual(second["remarks"], "Needs improvement")
        self.assertEqual(first["class_statistics"]["total_students"], 2)
        self.assertEqual(first["result"]["subject_ranks"]["math"], {"rank": 1, "total": 2})

    def test_custom_grade_table_drives_grades_and_remarks(self):
        table = load_grade_table('[{"min": 15, "label": "P", "gp": 1}, {"min": 0, "label": "X", "passing": false}]')
        service = ResultsService(grade_table=table)
        results = service.compute(self.students, self.subjects, self.marks)

        self.assertEqual([r.grade for r in results.results], ["P", "P"])
        self.assertEqual(results.statistics.pass_count, 2)
        self.assertEqual(service.grade(10), {"grade": "X", "grade_point": 0.0, "passing": False})
        self.assertEqual(service.grade_table_rows()["pass_threshold"], 15)


if __name__ == "__main__":
    unittest.main()
