"""Tests for cover letter generation, listing and deletion."""

from careercraft.errors import GenerationFailed
from careercraft.models.cover_letter import CoverLetter

from conftest import auth_headers


JOB = {
    "job_title": "Backend Engineer",
    "company_name": "Acme",
    "job_description": "Python, FastAPI, Postgres.",
}


class TestGenerateCoverLetter:
    def test_generated_and_stored(self, client, db, alice, fake_ai):
        fake_ai.queue("```markdown\nDear Hiring Manager,\n\nI am excited...\n```")
        resp = client.post("/api/cover-letters", json=JOB, headers=auth_headers())
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "completed"
        assert body["company_name"] == "Acme"
        assert body["content"].startswith("Dear Hiring Manager,")
        assert "Backend Engineer" in fake_ai.prompts[0]
        assert "Acme" in fake_ai.prompts[0]

        db.expire_all()
        assert db.query(CoverLetter).filter(CoverLetter.user_id == alice.id).count() == 1

    def test_missing_fields_rejected_before_ai(self, client, db, alice, fake_ai):
        resp = client.post("/api/cover-letters", json={**JOB, "company_name": ""}, headers=auth_headers())
        assert resp.status_code == 400
        assert resp.json()["details"]["fields"] == ["company_name"]
        assert fake_ai.calls == 0
        assert db.query(CoverLetter).count() == 0

    def test_generation_failure_stores_nothing(self, client, db, alice, fake_ai):
        fake_ai.queue(GenerationFailed())
        resp = client.post("/api/cover-letters", json=JOB, headers=auth_headers())
        assert resp.status_code == 502
        db.expire_all()
        assert db.query(CoverLetter).count() == 0

    def test_repeat_creates_duplicates(self, client, db, alice, fake_ai):
        fake_ai.queue("Letter one", "Letter two")
        client.post("/api/cover-letters", json=JOB, headers=auth_headers())
        client.post("/api/cover-letters", json=JOB, headers=auth_headers())
        db.expire_all()
        assert db.query(CoverLetter).count() == 2


class TestReadCoverLetters:
    def test_list_only_own(self, client, db, alice, bob):
        db.add_all([
            CoverLetter(user_id=alice.id, content="a", job_title="A", company_name="X", status="completed"),
            CoverLetter(user_id=bob.id, content="b", job_title="B", company_name="Y", status="completed"),
        ])
        db.commit()
        resp = client.get("/api/cover-letters", headers=auth_headers())
        assert [c["content"] for c in resp.json()] == ["a"]

    def test_get_other_users_letter_not_found(self, client, db, alice, bob):
        letter = CoverLetter(user_id=bob.id, content="b", job_title="B", company_name="Y")
        db.add(letter)
        db.commit()
        resp = client.get(f"/api/cover-letters/{letter.id}", headers=auth_headers())
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "NOT_FOUND"

    def test_get_own_letter(self, client, db, alice):
        letter = CoverLetter(user_id=alice.id, content="mine", job_title="A", company_name="X")
        db.add(letter)
        db.commit()
        resp = client.get(f"/api/cover-letters/{letter.id}", headers=auth_headers())
        assert resp.status_code == 200
        assert resp.json()["content"] == "mine"


class TestDeleteCoverLetter:
    def test_delete_own(self, client, db, alice):
        letter = CoverLetter(user_id=alice.id, content="mine", job_title="A", company_name="X")
        db.add(letter)
        db.commit()
        letter_id = letter.id

        resp = client.delete(f"/api/cover-letters/{letter_id}", headers=auth_headers())
        assert resp.status_code == 200
        assert resp.json()["id"] == letter_id
        db.expire_all()
        assert db.get(CoverLetter, letter_id) is None

    def test_delete_other_users_letter_fails_and_keeps_row(self, client, db, alice, bob):
        letter = CoverLetter(user_id=bob.id, content="bob's", job_title="B", company_name="Y")
        db.add(letter)
        db.commit()
        letter_id = letter.id

        resp = client.delete(f"/api/cover-letters/{letter_id}", headers=auth_headers())
        assert resp.status_code == 404
        db.expire_all()
        assert db.get(CoverLetter, letter_id) is not None

    def test_delete_unknown_id(self, client, alice):
        resp = client.delete("/api/cover-letters/does-not-exist", headers=auth_headers())
        assert resp.status_code == 404
