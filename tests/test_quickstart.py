"""Test that the quickstart API works for route-access."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import route_access as ra

    assert ra.__version__ == "0.1.0"


def test_quickstart_granted() -> None:
    from route_access import Access

    access = Access(policy="deny")
    access.allow("GET /blog*").allow("* /admin*", "admin")
    assert access.granted("GET /blog/hello") is True
    assert access.granted("POST /admin/users", ["editor", "admin"]) is True
    assert access.granted("POST /admin/users", "editor") is False


def test_quickstart_authorize() -> None:
    from route_access import Access, RequestContext

    access = Access().deny("PUT /blog/entry")
    ctx = RequestContext(verb="PUT", path="/blog/entry")
    assert access.authorize(ctx, "client") is False
    assert ctx.error_code == 403


def test_quickstart_from_yaml() -> None:
    from route_access import ConfigLoader

    access = ConfigLoader().load_string(
        'policy: deny\nrules:\n  "ALLOW GET /blog*": "*"\n'
    ).build()
    assert access.granted("GET /blog/1") is True
    assert access.granted("POST /blog/1") is False
