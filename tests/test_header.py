from magsday.data.auth_client import Identity
from magsday.header import display_name


def test_display_name_from_email():
    assert display_name(Identity(uid="u1", email="mary.jane@example.com")) == "Mary Jane"


def test_display_name_without_identity():
    assert display_name(None) == "There"
    assert display_name(Identity(uid="u1", email="")) == "There"


def test_display_name_is_escaped_for_markup():
    name = display_name(Identity(uid="u1", email="<img src=x onerror=alert(1)>@example.com"))
    assert "<" not in name
    assert name.startswith("&lt;Img")
