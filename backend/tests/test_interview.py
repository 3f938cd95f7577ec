"""Tests for quiz generation, result saving and assessment history."""

import json
from datetime import datetime, timezone

from careercraft.errors import GenerationFailed
from careercraft.models.assessment import Assessment
from careercraft.models.industry_insight import IndustryInsight
from careercraft.prompts import IMPROVEMENT_TIP_FALLBACK

from conftest import auth_headers, make_user


QUIZ_REPLY = json.dumps({
    "questions": [
        {
            "question": "What does ROS stand for?",
            "options": ["Robot Operating System", "Real OS", "Robotic Object Store", "None"],
            "correctAnswer": "Robot Operating System",
            "explanation": "ROS is the Robot Operating System.",
        }
    ]
})

RESULT = {
    "questions": [
        {"question": "A", "options": ["X", "Y"], "correctAnswer": "X", "explanation": "X is right"},
        {"question": "B", "options": ["Y", "Z"], "correctAnswer": "Y", "explanation": "Y is right"},
    ],
    "answers": ["X", "Z"],
    "score": 50,
}


def onboarded_user(db, skills='["ROS", "C++"]'):
    db.add(IndustryInsight(industry="Robotics", next_update=datetime.now(timezone.utc)))
    db.commit()
    return make_user(db, industry="Robotics", skills=skills)


class TestGenerateQuiz:
    def test_questions_returned(self, client, db, fake_ai):
        onboarded_user(db)
        fake_ai.queue("```json\n" + QUIZ_REPLY + "\n```")
        resp = client.post("/api/interview/quiz", headers=auth_headers())
        assert resp.status_code == 200
        questions = resp.json()["questions"]
        assert len(questions) == 1
        assert questions[0]["correctAnswer"] == "Robot Operating System"
        assert "Robotics professional with expertise in ROS, C++" in fake_ai.prompts[0]

    def test_prompt_without_skills(self, client, db, fake_ai):
        db.add(IndustryInsight(industry="Robotics", next_update=datetime.now(timezone.utc)))
        db.commit()
        make_user(db, industry="Robotics")
        fake_ai.queue(QUIZ_REPLY)
        client.post("/api/interview/quiz", headers=auth_headers())
        assert "expertise" not in fake_ai.prompts[0]

    def test_missing_questions_key(self, client, db, fake_ai):
        onboarded_user(db)
        fake_ai.queue('{"items": []}')
        resp = client.post("/api/interview/quiz", headers=auth_headers())
        assert resp.status_code == 502
        assert resp.json()["error_code"] == "MALFORMED_AI_RESPONSE"

    def test_questions_not_a_list(self, client, db, fake_ai):
        onboarded_user(db)
        fake_ai.queue('{"questions": {"question": "A"}}')
        resp = client.post("/api/interview/quiz", headers=auth_headers())
        assert resp.status_code == 502
        assert resp.json()["error_code"] == "MALFORMED_AI_RESPONSE"

    def test_industry_not_set(self, client, alice, fake_ai):
        resp = client.post("/api/interview/quiz", headers=auth_headers())
        assert resp.status_code == 400
        assert fake_ai.calls == 0


class TestSaveQuizResult:
    def test_wrong_answer_gets_tip(self, client, db, alice, fake_ai):
        fake_ai.queue("Review the fundamentals of B.")
        resp = client.post("/api/interview/results", json=RESULT, headers=auth_headers())
        assert resp.status_code == 201
        body = resp.json()
        assert body["quiz_score"] == 50
        assert body["category"] == "Technical"
        assert body["improvement_tip"] == "Review the fundamentals of B."
        assert [q["isCorrect"] for q in body["questions"]] == [True, False]
        assert body["questions"][1]["userAnswer"] == "Z"

        # Only the wrong answer is described to the model
        assert fake_ai.calls == 1
        assert 'Question: "B"' in fake_ai.prompts[0]
        assert 'Question: "A"' not in fake_ai.prompts[0]

    def test_missing_score_is_400(self, client, db, alice, fake_ai):
        body = {k: v for k, v in RESULT.items() if k != "score"}
        resp = client.post("/api/interview/results", json=body, headers=auth_headers())
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "MISSING_INPUT"
        assert resp.json()["details"]["fields"] == ["score"]
        assert fake_ai.calls == 0
        db.expire_all()
        assert db.query(Assessment).count() == 0

    def test_all_correct_has_no_tip_and_no_ai_call(self, client, db, alice, fake_ai):
        resp = client.post(
            "/api/interview/results",
            json={**RESULT, "answers": ["X", "Y"], "score": 100},
            headers=auth_headers(),
        )
        assert resp.status_code == 201
        assert resp.json()["improvement_tip"] is None
        assert fake_ai.calls == 0
        db.expire_all()
        assert db.query(Assessment).one().improvement_tip is None

    def test_tip_failure_uses_fallback(self, client, alice, fake_ai):
        fake_ai.queue(GenerationFailed())
        resp = client.post("/api/interview/results", json=RESULT, headers=auth_headers())
        assert resp.status_code == 201
        assert resp.json()["improvement_tip"] == IMPROVEMENT_TIP_FALLBACK

    def test_short_answers_are_incorrect(self, client, alice, fake_ai):
        fake_ai.queue("Keep practising.")
        resp = client.post(
            "/api/interview/results",
            json={**RESULT, "answers": ["X"]},
            headers=auth_headers(),
        )
        second = resp.json()["questions"][1]
        assert second["userAnswer"] is None
        assert second["isCorrect"] is False

    def test_results_stored_as_json(self, client, db, alice, fake_ai):
        fake_ai.queue("tip")
        client.post("/api/interview/results", json=RESULT, headers=auth_headers())
        db.expire_all()
        stored = json.loads(db.query(Assessment).one().questions)
        assert stored[0] == {
            "question": "A",
            "answer": "X",
            "userAnswer": "X",
            "isCorrect": True,
            "explanation": "X is right",
        }


class TestAssessments:
    def test_only_own_newest_first(self, client, db, alice, bob):
        db.add_all([
            Assessment(user_id=alice.id, quiz_score=10, questions="[]",
                       created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            Assessment(user_id=alice.id, quiz_score=90, questions="[]",
                       created_at=datetime(2024, 6, 1, tzinfo=timezone.utc)),
            Assessment(user_id=bob.id, quiz_score=50, questions="[]"),
        ])
        db.commit()
        resp = client.get("/api/interview/assessments", headers=auth_headers())
        assert resp.status_code == 200
        assert [a["quiz_score"] for a in resp.json()] == [90, 10]
