"""
Shared fixtures: an in-memory stand-in for the LINE Messaging API and a Flask
test client wired to it through the gateway factory.
"""

import json

import pytest
from linebot.v3.messaging import ApiException
from linebot.v3.messaging.models import (
    RichMenuIdResponse,
    RichMenuListResponse,
    RichMenuResponse,
)

from main import create_app


def make_api_exception(status: int, message: str) -> ApiException:
    error = ApiException(status=status, reason=message)
    error.body = json.dumps({"message": message})
    return error


class FakeLineAccount:
    """Upstream state shared by every gateway the app creates during a test."""

    def __init__(self):
        self.rich_menus = {}
        self.images = {}
        self.user_links = {}
        self.default_rich_menu_id = None
        self.tokens = []
        self.calls = []
        self.fail_delete = False
        self._next_id = 1

    def gateway_factory(self, channel_access_token):
        self.tokens.append(channel_access_token)
        return FakeGateway(self)

    def new_id(self):
        rich_menu_id = f"richmenu-{self._next_id:032d}"
        self._next_id += 1
        return rich_menu_id

    def require(self, rich_menu_id):
        if rich_menu_id not in self.rich_menus:
            raise make_api_exception(404, "Not found")


class FakeGateway:
    def __init__(self, account: FakeLineAccount):
        self.account = account
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.closed = True

    def get_rich_menu_list(self):
        self.account.calls.append("get_rich_menu_list")
        return RichMenuListResponse.from_dict(
            {"richmenus": list(self.account.rich_menus.values())}
        )

    def get_rich_menu(self, rich_menu_id):
        self.account.calls.append("get_rich_menu")
        self.account.require(rich_menu_id)
        return RichMenuResponse.from_dict(self.account.rich_menus[rich_menu_id])

    def create_rich_menu(self, rich_menu_request):
        self.account.calls.append("create_rich_menu")
        rich_menu_id = self.account.new_id()
        stored = rich_menu_request.to_dict()
        stored["richMenuId"] = rich_menu_id
        self.account.rich_menus[rich_menu_id] = stored
        return RichMenuIdResponse(rich_menu_id=rich_menu_id)

    def delete_rich_menu(self, rich_menu_id):
        self.account.calls.append("delete_rich_menu")
        if self.account.fail_delete:
            raise make_api_exception(500, "Internal server error")
        self.account.require(rich_menu_id)
        del self.account.rich_menus[rich_menu_id]

    def set_rich_menu_image(self, rich_menu_id, content_type, data):
        self.account.calls.append("set_rich_menu_image")
        self.account.require(rich_menu_id)
        self.account.images[rich_menu_id] = (content_type, data)

    def get_rich_menu_image(self, rich_menu_id):
        self.account.calls.append("get_rich_menu_image")
        if rich_menu_id not in self.account.images:
            raise make_api_exception(404, "Not found")
        return self.account.images[rich_menu_id][1]

    def get_rich_menu_id_of_user(self, user_id):
        self.account.calls.append("get_rich_menu_id_of_user")
        if user_id not in self.account.user_links:
            raise make_api_exception(404, "the user has no richmenu")
        return RichMenuIdResponse(rich_menu_id=self.account.user_links[user_id])

    def link_rich_menu_id_to_user(self, user_id, rich_menu_id):
        self.account.calls.append("link_rich_menu_id_to_user")
        self.account.require(rich_menu_id)
        self.account.user_links[user_id] = rich_menu_id

    def unlink_rich_menu_id_from_user(self, user_id):
        self.account.calls.append("unlink_rich_menu_id_from_user")
        self.account.user_links.pop(user_id, None)

    def set_default_rich_menu(self, rich_menu_id):
        self.account.calls.append("set_default_rich_menu")
        self.account.require(rich_menu_id)
        self.account.default_rich_menu_id = rich_menu_id

    def cancel_default_rich_menu(self):
        self.account.calls.append("cancel_default_rich_menu")
        self.account.default_rich_menu_id = None


@pytest.fixture
def line_account():
    return FakeLineAccount()


@pytest.fixture
def app(line_account):
    app = create_app({
        "TESTING": True,
        "RICH_MENU_GATEWAY_FACTORY": line_account.gateway_factory,
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-channel-token"}


@pytest.fixture
def rich_menu_payload():
    """A definition as the browser layout editor sends it, floats included."""
    return {
        "size": {"width": 2500.0, "height": 1686.4},
        "selected": False,
        "name": "Main menu",
        "chatBarText": "Tap here",
        "areas": [
            {
                "bounds": {"x": 0, "y": 0, "width": 1249.5, "height": 843.2},
                "action": {"type": "postback", "label": "Query", "data": "action=query"},
            },
            {
                "bounds": {"x": 1249.5, "y": 0.4, "width": 1250.5, "height": 843},
                "action": {"type": "message", "label": "Help", "text": "help"},
            },
            {
                "bounds": {"x": 0, "y": 843.2, "width": 2500, "height": 842.8},
                "action": {"type": "uri", "label": "Site", "uri": "https://example.com/"},
            },
        ],
    }
