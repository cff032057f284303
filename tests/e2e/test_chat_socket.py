"""End-to-end tests for the real-time chat channel."""

import pytest
from starlette.websockets import WebSocketDisconnect


@pytest.fixture
def room(api):
    """Seller and buyer tokens plus an open conversation between them."""
    seller, seller_token = api.add_user("Sam Seller")
    _, buyer_token = api.add_user("Bea Buyer")
    _, outsider_token = api.add_user("Olly Outsider")
    item = api.add_item(seller, "Oak dining table")
    started = api.client_for(buyer_token).post(
        "/chat/conversations", json={"item_id": str(item.id)}
    )
    return {
        "seller_token": seller_token,
        "buyer_token": buyer_token,
        "outsider_token": outsider_token,
        "conversation_id": started.json()["data"]["conversation"]["conversation_id"],
    }


def join(socket, conversation_id):
    socket.send_json({"type": "join", "conversation_id": conversation_id})
    return socket.receive_json()


class TestChatSocket:
    """Tests for the WebSocket frames."""

    def test_connection_requires_token(self, api):
        """Should close the handshake when no credentials are sent."""
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with api.anonymous.websocket_connect("/chat/ws"):
                pass

        assert exc_info.value.code == 1008

    def test_message_reaches_the_other_participant(self, api, room):
        """Should deliver a sent message to the room and confirm to the sender."""
        cid = room["conversation_id"]
        with api.anonymous as client:
            with client.websocket_connect(
                f"/chat/ws?token={room['buyer_token']}"
            ) as buyer, client.websocket_connect(
                f"/chat/ws?token={room['seller_token']}"
            ) as seller:
                assert join(buyer, cid) == {"type": "joined", "conversation_id": cid}
                assert join(seller, cid)["type"] == "joined"

                buyer.send_json(
                    {"type": "send", "conversation_id": cid, "body": "Still for sale?"}
                )
                sent = buyer.receive_json()
                delivered = seller.receive_json()

        assert sent["type"] == "message_sent"
        assert delivered["type"] == "message"
        assert delivered["message"]["body"] == "Still for sale?"
        assert delivered["message"]["message_id"] == sent["message"]["message_id"]

    def test_socket_messages_are_stored(self, api, room):
        """Should persist messages sent over the socket."""
        cid = room["conversation_id"]
        with api.anonymous.websocket_connect(
            f"/chat/ws?token={room['buyer_token']}"
        ) as buyer:
            join(buyer, cid)
            buyer.send_json({"type": "send", "conversation_id": cid, "body": "Hello"})
            buyer.receive_json()

        unread = api.client_for(room["seller_token"]).get("/chat/unread-count")

        assert unread.json()["data"]["unread_count"] == 1

    def test_typing_is_relayed(self, api, room):
        """Should forward typing indicators to the other side only."""
        cid = room["conversation_id"]
        with api.anonymous as client:
            with client.websocket_connect(
                f"/chat/ws?token={room['buyer_token']}"
            ) as buyer, client.websocket_connect(
                f"/chat/ws?token={room['seller_token']}"
            ) as seller:
                join(buyer, cid)
                join(seller, cid)

                seller.send_json({"type": "typing", "conversation_id": cid})
                typing = buyer.receive_json()

        assert typing["type"] == "typing"
        assert typing["name"] == "Sam Seller"
        assert typing["is_typing"] is True

    def test_outsider_cannot_join(self, api, room):
        """Should answer with an error frame and keep the socket open."""
        cid = room["conversation_id"]
        with api.anonymous.websocket_connect(
            f"/chat/ws?token={room['outsider_token']}"
        ) as outsider:
            refused = join(outsider, cid)
            outsider.send_json({"type": "dance", "conversation_id": cid})
            unknown = outsider.receive_json()

        assert refused["type"] == "error"
        assert refused["kind"] == "Forbidden"
        assert unknown["kind"] == "InvalidOperation"

    def test_typing_requires_joining_the_room(self, api, room):
        """Should refuse typing events from sockets outside the room."""
        cid = room["conversation_id"]
        with api.anonymous as client:
            with client.websocket_connect(
                f"/chat/ws?token={room['buyer_token']}"
            ) as buyer, client.websocket_connect(
                f"/chat/ws?token={room['seller_token']}"
            ) as seller, client.websocket_connect(
                f"/chat/ws?token={room['outsider_token']}"
            ) as outsider:
                join(buyer, cid)

                outsider.send_json({"type": "typing", "conversation_id": cid})
                refused = outsider.receive_json()
                join(seller, cid)
                seller.send_json({"type": "typing", "conversation_id": cid})
                relayed = buyer.receive_json()

        assert refused["type"] == "error"
        assert refused["kind"] == "Forbidden"
        assert relayed["type"] == "typing"
        assert relayed["name"] == "Sam Seller"

    def test_invalid_frames_get_error_frames(self, api, room):
        """Should report malformed frames without dropping the connection."""
        with api.anonymous.websocket_connect(
            f"/chat/ws?token={room['buyer_token']}"
        ) as buyer:
            buyer.send_text("not json")
            not_json = buyer.receive_json()
            buyer.send_json({"type": "join"})
            missing_id = buyer.receive_json()
            buyer.send_json(
                {"type": "send", "conversation_id": room["conversation_id"], "body": ""}
            )
            empty = buyer.receive_json()

        assert not_json["kind"] == "ValidationError"
        assert missing_id["message"] == "conversation_id is required"
        assert empty["kind"] == "ValidationError"
