import unittest

from fastapi.testclient import TestClient

from reportcards.app import app

PAYLOAD = {
    "students": [
        {"id": "S1", "name": "Asha", "roll_number": "1"},
        {"id": "S2", "name": "Bilal", "roll_number": "2"},
        {"id": "S3", "name": "Chen", "roll_number": "3"},
    ],
    "subjects": [
        {"id": "math", "name": "Math", "max_marks": 100},
        {"id": "eng", "name": "English", "max_marks": 100},
    ],
    "marks": [
        {"student_id": "S1", "subject_id": "math", "obtained_marks": 90},
        {"student_id": "S1", "subject_id": "eng", "obtained_marks": 80},
        {"student_id": "S2", "subject_id": "math", "obtained_marks": 90},
        {"student_id": "S2", "subject_id": "eng", "obtained_marks": 70},
        {"student_id": "S3", "subject_id": "math", "obtained_marks": 40},
        {"student_id": "S3", "subject_id": "eng", "obtained_marks": 40},
    ],
}


class ResultsApiTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_health(self):
        res = self.client.get("/health")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"status": "ok"})

    def test_grading_table(self):
        data = self.client.get("/grading/table").json()
        self.assertEqual(data["bands"][0]["label"], "A+")
        self.assertEqual(data["pass_threshold"], 33)

    def test_grade(self):
        res = self.client.post("/grading/grade", json={"percentage": 90})
        self.assertEqual(res.json()["grade"], "A+")

    def test_compute_results(self):
        res = self.client.post("/results/compute", json=PAYLOAD)
        self.assertEqual(res.status_code, 200)
        data = res.json()
        self.assertEqual([r["student_id"] for r in data["results"]], ["S1", "S2", "S3"])
        self.assertEqual([r["position"] for r in data["results"]], [1, 2, 3])
        self.assertEqual(data["results"][2]["subject_ranks"]["math"], {"rank": 3, "total": 3})
        self.assertAlmostEqual(data["statistics"]["average_percentage"], 68.3333333, places=5)
        self.assertEqual([t["student_id"] for t in data["statistics"]["top3"]], ["S1", "S2", "S3"])
        self.assertEqual(data["warnings"], [])

    def test_compute_results_with_recorded_policy(self):
        payload = dict(PAYLOAD, marks=PAYLOAD["marks"][:3], denominator_policy="recorded")
        data = self.client.post("/results/compute", json=payload).json()
        by_id = {r["student_id"]: r for r in data["results"]}
        self.assertEqual(by_id["S2"]["total_max"], 100)
        self.assertEqual(by_id["S2"]["position"], 1)
        self.assertEqual(by_id["S3"]["total_max"], 0)
        self.assertEqual(by_id["S3"]["percentage"], 0)

    def test_empty_exam_reports_warnings(self):
        data = self.client.post("/results/compute", json={}).json()
        self.assertEqual(data["results"], [])
        self.assertEqual(data["statistics"]["total_students"], 0)
        self.assertEqual(data["statistics"]["top3"], [])
        self.assertEqual(sorted(data["warnings"]), ["NO_STUDENTS", "NO_SUBJECTS_CONFIGURED"])

    def test_rejects_invalid_payload(self):
        bad_subject = dict(PAYLOAD, subjects=[{"id": "math", "name": "Math", "max_marks": 0}])
        self.assertEqual(self.client.post("/results/compute", json=bad_subject).status_code, 422)
        bad_policy = dict(PAYLOAD, denominator_policy="average")
        self.assertEqual(self.client.post("/results/compute", json=bad_policy).status_code, 422)

    def test_report_cards(self):
        data = self.client.post("/results/report-cards", json=PAYLOAD).json()
        labels = [card["position_label"] for card in data["report_cards"]]
        self.assertEqual(labels, ["1st", "2nd", "3rd"])
        self.assertEqual(data["report_cards"][0]["remarks"], "Promoted to next class")


if __name__ == "__main__":
    unittest.main()
