"""
Tests for API request and response schemas.
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    CreateSessionRequest,
    IntentRequest,
    IntentType,
    ErrorResponse,
    ErrorCode,
)


class TestRequests:
    """Request validation."""

    def test_create_defaults(self):
        """Defaults seat one human against one computer."""
        request = CreateSessionRequest()
        assert request.player_names == ["Player"]
        assert request.computer_seats == 1
        assert request.ruleset is None

    @pytest.mark.parametrize("payload", [
        {"player_names": []},
        {"computer_seats": -1},
        {"computer_seats": 5},
    ])
    def test_create_rejects(self, payload):
        """Out-of-range seat lists and counts are refused."""
        with pytest.raises(ValidationError):
            CreateSessionRequest(**payload)

    def test_intent_parses_wire_names(self):
        """Intents parse from their wire names."""
        request = IntentRequest.model_validate({"player_id": "player-1", "intent": "play_card", "hand_index": 2})
        assert request.intent == IntentType.PLAY_CARD
        assert request.hand_index == 2

    def test_intent_rejects_negative_index(self):
        """Hand indices cannot be negative."""
        with pytest.raises(ValidationError):
            IntentRequest(player_id="player-1", intent=IntentType.DISCARD, hand_index=-1)

    def test_intent_rejects_unknown_type(self):
        """Unknown intent types are refused."""
        with pytest.raises(ValidationError):
            IntentRequest(player_id="player-1", intent="steal")


class TestResponses:
    """Response serialization."""

    def test_error_response_json(self):
        """Error responses serialize to plain JSON."""
        data = ErrorResponse(
            error="It is CPU Red's turn",
            error_code=ErrorCode.NOT_YOUR_TURN,
        ).model_dump(mode="json")

        assert data == {
            "error": "It is CPU Red's turn",
            "error_code": "NOT_YOUR_TURN",
            "details": None,
            "api_version": "v1",
        }
