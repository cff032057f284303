"""End-to-end tests for buyer/seller chat over HTTP."""

import pytest


@pytest.fixture
def market(api):
    """A seller with a listed item, a buyer and an outsider."""
    seller, seller_token = api.add_user("Sam Seller")
    buyer, buyer_token = api.add_user("Bea Buyer")
    _, outsider_token = api.add_user("Olly Outsider")
    item = api.add_item(seller, "Oak dining table")
    return {
        "seller": seller,
        "buyer": buyer,
        "item": item,
        "seller_client": api.client_for(seller_token),
        "buyer_client": api.client_for(buyer_token),
        "outsider_client": api.client_for(outsider_token),
    }


def start(client, item_id):
    response = client.post("/chat/conversations", json={"item_id": str(item_id)})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def send(client, conversation_id, body):
    response = client.post(
        "/chat/messages", json={"conversation_id": conversation_id, "body": body}
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestConversations:
    """Tests for starting and listing conversations."""

    def test_contacting_seller_opens_one_conversation(self, market):
        """Should create the conversation once and reuse it afterwards."""
        first = start(market["buyer_client"], market["item"].id)
        again = start(market["buyer_client"], market["item"].id)

        assert first["created"] is True
        assert again["created"] is False
        conversation = first["conversation"]
        assert again["conversation"]["conversation_id"] == conversation["conversation_id"]
        assert conversation["seller_id"] == str(market["seller"].id)
        assert conversation["buyer_id"] == str(market["buyer"].id)
        assert conversation["last_message"] == (
            "Bea Buyer is interested in your item: Oak dining table"
        )

    def test_seller_cannot_contact_themselves(self, market):
        """Should refuse a conversation about the caller's own item."""
        response = market["seller_client"].post(
            "/chat/conversations", json={"item_id": str(market["item"].id)}
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "InvalidOperation"

    def test_listing_shows_both_sides(self, market):
        """Should list the conversation for seller and buyer only."""
        start(market["buyer_client"], market["item"].id)

        seller_view = market["seller_client"].get("/chat/conversations").json()
        outsider_view = market["outsider_client"].get("/chat/conversations").json()

        assert len(seller_view["data"]["conversations"]) == 1
        assert outsider_view["data"]["conversations"] == []


class TestMessages:
    """Tests for sending, reading and unread counts."""

    def test_messages_flow_and_unread_count(self, market):
        """Should count the other side's messages until they are read."""
        # Arrange
        conversation_id = start(market["buyer_client"], market["item"].id)[
            "conversation"
        ]["conversation_id"]

        # Act
        send(market["buyer_client"], conversation_id, "Is it still available?")
        send(market["buyer_client"], conversation_id, "I can pick it up today.")
        before = market["seller_client"].get("/chat/unread-count").json()
        page = market["seller_client"].get(
            f"/chat/conversations/{conversation_id}/messages"
        ).json()
        after = market["seller_client"].get("/chat/unread-count").json()

        # Assert
        assert before["data"]["unread_count"] == 2
        assert after["data"]["unread_count"] == 0
        bodies = [m["body"] for m in page["data"]["messages"]]
        assert bodies[-2:] == ["Is it still available?", "I can pick it up today."]
        assert page["data"]["messages"][0]["message_type"] == "system"

    def test_reply_updates_preview(self, market):
        """Should show the newest message as the conversation preview."""
        conversation_id = start(market["buyer_client"], market["item"].id)[
            "conversation"
        ]["conversation_id"]

        reply = send(market["seller_client"], conversation_id, "Yes, come by at six.")
        listing = market["buyer_client"].get("/chat/conversations").json()

        assert reply["sender_id"] == str(market["seller"].id)
        assert listing["data"]["conversations"][0]["last_message"] == (
            "Yes, come by at six."
        )
        assert market["buyer_client"].get("/chat/unread-count").json()["data"] == {
            "unread_count": 1
        }

    def test_outsider_cannot_read_or_write(self, market):
        """Should forbid non-participants."""
        conversation_id = start(market["buyer_client"], market["item"].id)[
            "conversation"
        ]["conversation_id"]
        outsider = market["outsider_client"]

        read = outsider.get(f"/chat/conversations/{conversation_id}/messages")
        write = outsider.post(
            "/chat/messages", json={"conversation_id": conversation_id, "body": "Hi"}
        )

        assert read.status_code == 403
        assert write.status_code == 403

    def test_system_messages_are_refused(self, market):
        """Should not let users post system messages."""
        conversation_id = start(market["buyer_client"], market["item"].id)[
            "conversation"
        ]["conversation_id"]

        response = market["buyer_client"].post(
            "/chat/messages",
            json={
                "conversation_id": conversation_id,
                "body": "Item sold",
                "message_type": "system",
            },
        )

        assert response.status_code == 400

    def test_overlong_message_is_rejected(self, market):
        """Should enforce the message length limit."""
        conversation_id = start(market["buyer_client"], market["item"].id)[
            "conversation"
        ]["conversation_id"]

        response = market["buyer_client"].post(
            "/chat/messages",
            json={"conversation_id": conversation_id, "body": "x" * 1001},
        )

        assert response.status_code == 422
