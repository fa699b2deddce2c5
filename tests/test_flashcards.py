"""Tests for flashcard API endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tenx_cards import models


@pytest.fixture
def test_generation(db_session: Session, test_user: models.User) -> models.Generation:
    generation = models.Generation(
        user_id=test_user.id,
        model="google/gemma-3n-e2b-it:free",
        source_text_hash="0" * 64,
        source_text_length=1500,
        generated_count=3,
    )
    db_session.add(generation)
    db_session.commit()
    db_session.refresh(generation)
    return generation


@pytest.fixture
def foreign_generation(db_session: Session, other_user: models.User) -> models.Generation:
    generation = models.Generation(
        user_id=other_user.id,
        model="google/gemma-3n-e2b-it:free",
        source_text_hash="1" * 64,
        source_text_length=2000,
    )
    db_session.add(generation)
    db_session.commit()
    db_session.refresh(generation)
    return generation


def _add_flashcard(
    db_session: Session, user: models.User, front: str = "Front", back: str = "Back"
) -> models.Flashcard:
    flashcard = models.Flashcard(user_id=user.id, front=front, back=back, source="manual")
    db_session.add(flashcard)
    db_session.commit()
    db_session.refresh(flashcard)
    return flashcard


class TestCreateFlashcards:
    """Test suite for POST /api/flashcards."""

    def test_create_batch_from_generation(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        test_generation: models.Generation,
    ) -> None:
        response = client.post(
            "/api/flashcards",
            json={
                "flashcards": [
                    {
                        "front": "  Co to jest?  ",
                        "back": "Odpowiedź",
                        "source": "ai-full",
                        "generation_id": test_generation.id,
                    },
                    {
                        "front": "X",
                        "back": "Y",
                        "source": "ai-edited",
                        "generation_id": test_generation.id,
                    },
                ]
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["count"] == 2
        assert body["data"][0]["front"] == "Co to jest?"
        assert body["data"][1]["source"] == "ai-edited"
        assert all(card["user_id"] == test_user.id for card in body["data"])
        assert all(card["generation_id"] == test_generation.id for card in body["data"])
        assert db_session.query(models.Flashcard).count() == 2

    def test_create_manual_without_generation(self, client: TestClient) -> None:
        response = client.post(
            "/api/flashcards",
            json={"flashcards": [{"front": "Q", "back": "A", "source": "manual"}]},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"][0]["generation_id"] is None

    def test_foreign_generation_rejects_whole_batch(
        self,
        client: TestClient,
        db_session: Session,
        test_generation: models.Generation,
        foreign_generation: models.Generation,
    ) -> None:
        """One card pointing at another user's generation inserts nothing."""
        response = client.post(
            "/api/flashcards",
            json={
                "flashcards": [
                    {
                        "front": "Q1",
                        "back": "A1",
                        "source": "ai-full",
                        "generation_id": test_generation.id,
                    },
                    {
                        "front": "Q2",
                        "back": "A2",
                        "source": "ai-full",
                        "generation_id": foreign_generation.id,
                    },
                ]
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["code"] == "FOREIGN_KEY_ERROR"
        assert str(foreign_generation.id) in body["details"]
        assert db_session.query(models.Flashcard).count() == 0

        listing = client.get("/api/flashcards")
        assert listing.json()["count"] == 0

    def test_unknown_generation_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/flashcards",
            json={
                "flashcards": [
                    {"front": "Q", "back": "A", "source": "ai-full", "generation_id": 9999}
                ]
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "FOREIGN_KEY_ERROR"

    @pytest.mark.parametrize(
        ("card", "field"),
        [
            ({"front": "", "back": "A", "source": "manual"}, "flashcards.0.front"),
            ({"front": "Q", "back": "   ", "source": "manual"}, "flashcards.0.back"),
            ({"front": "Q" * 201, "back": "A", "source": "manual"}, "flashcards.0.front"),
            ({"front": "Q", "back": "A" * 501, "source": "manual"}, "flashcards.0.back"),
            ({"front": "Q", "back": "A", "source": "copied"}, "flashcards.0.source"),
        ],
    )
    def test_invalid_card_rejected(self, client: TestClient, card: dict, field: str) -> None:
        response = client.post("/api/flashcards", json={"flashcards": [card]})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "Nieprawidłowe dane wejściowe"
        assert any(detail["field"] == field for detail in body["details"])

    def test_front_length_limit_in_messages(self, client: TestClient) -> None:
        response = client.post(
            "/api/flashcards",
            json={"flashcards": [{"front": "Q" * 201, "back": "A", "source": "manual"}]},
        )

        messages = [detail["message"] for detail in response.json()["details"]]
        assert "Przód nie może przekraczać 200 znaków" in messages

    def test_empty_batch_rejected(self, client: TestClient) -> None:
        response = client.post("/api/flashcards", json={"flashcards": []})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_batch_over_limit_rejected(self, client: TestClient) -> None:
        cards = [{"front": f"Q{i}", "back": "A", "source": "manual"} for i in range(101)]

        response = client.post("/api/flashcards", json={"flashcards": cards})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetFlashcards:
    """Test suite for GET /api/flashcards."""

    def test_list_only_own_cards_newest_first(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        other_user: models.User,
    ) -> None:
        first = _add_flashcard(db_session, test_user, front="First")
        second = _add_flashcard(db_session, test_user, front="Second")
        _add_flashcard(db_session, other_user, front="Not mine")

        response = client.get("/api/flashcards")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["count"] == 2
        assert [card["id"] for card in body["data"]] == [second.id, first.id]

    def test_get_single(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, test_user)

        response = client.get(f"/api/flashcards?id={flashcard.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["id"] == flashcard.id
        assert "count" not in response.json()

    def test_get_foreign_card_is_not_found(
        self, client: TestClient, db_session: Session, other_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, other_user)

        response = client.get(f"/api/flashcards?id={flashcard.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["details"] == "Fiszka nie została znaleziona"


class TestUpdateFlashcard:
    """Test suite for PUT /api/flashcards?id=."""

    def test_update_content_and_source(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, test_user)

        response = client.put(
            f"/api/flashcards?id={flashcard.id}",
            json={"front": "New front", "source": "ai-edited"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["front"] == "New front"
        assert data["back"] == "Back"
        assert data["source"] == "ai-edited"

    def test_update_foreign_card_is_not_found(
        self, client: TestClient, db_session: Session, other_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, other_user)

        response = client.put(f"/api/flashcards?id={flashcard.id}", json={"front": "Hijack"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        db_session.refresh(flashcard)
        assert flashcard.front == "Front"

    def test_update_without_id(self, client: TestClient) -> None:
        response = client.put("/api/flashcards", json={"front": "X"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "ID fiszki jest wymagane"

    def test_update_requires_a_field(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, test_user)

        response = client.put(f"/api/flashcards?id={flashcard.id}", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteFlashcard:
    """Test suite for DELETE /api/flashcards?id=."""

    def test_delete_own_card(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, test_user)
        flashcard_id = flashcard.id

        response = client.delete(f"/api/flashcards?id={flashcard_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        db_session.expire_all()
        assert db_session.get(models.Flashcard, flashcard_id) is None

    def test_delete_without_id(self, client: TestClient) -> None:
        response = client.delete("/api/flashcards")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "ID fiszki jest wymagane"
        assert body["details"] == "ID fiszki jest wymagane"

    def test_delete_foreign_card_is_not_found(
        self, client: TestClient, db_session: Session, other_user: models.User
    ) -> None:
        flashcard = _add_flashcard(db_session, other_user)

        response = client.delete(f"/api/flashcards?id={flashcard.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert db_session.query(models.Flashcard).count() == 1

    def test_deleting_generation_keeps_cards(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        test_generation: models.Generation,
    ) -> None:
        """Flashcards outlive their generation; the reference is cleared."""
        client.post(
            "/api/flashcards",
            json={
                "flashcards": [
                    {
                        "front": "Q",
                        "back": "A",
                        "source": "ai-full",
                        "generation_id": test_generation.id,
                    }
                ]
            },
        )

        db_session.delete(test_generation)
        db_session.commit()
        db_session.expire_all()

        flashcard = db_session.query(models.Flashcard).one()
        assert flashcard.generation_id is None
