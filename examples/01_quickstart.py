#!/usr/bin/env python3
"""Example: Quickstart — route-access

Register rules, query them, and authorize a request.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install route-access
"""
from __future__ import annotations

import route_access as ra


def main() -> None:
    print(f"route-access version: {ra.__version__}")

    # Step 1: Build an engine with a named route alias
    routes = ra.RouteTable.build({"blog_entry": "/blog/@id/@slug"})
    access = ra.Access(policy="allow", routes=routes)
    access.deny("POST|PUT|DELETE /blog*")
    access.allow("* /blog*", "admin")
    access.deny("GET @blog_entry", "banned")

    # Step 2: Query decisions
    queries = [
        ("GET /blog/1/hello", "client"),
        ("PUT /blog/1/hello", "client"),
        ("PUT /blog/1/hello", "admin"),
        ("GET /blog/1/hello", "banned"),
        ("GET /blog/1/hello", ["banned", "admin"]),
    ]
    print("\nDecisions:")
    for route, subject in queries:
        decision = access.decide(route, subject)
        icon = "GRANT" if decision.allowed else "DENY"
        rule = decision.rule.describe() if decision.rule else "default policy"
        print(f"  [{icon}] {route} as {subject!r} ({rule})")

    # Step 3: Authorize a request
    ctx = ra.RequestContext(verb="DELETE", path="/blog/1/hello")
    if not access.authorize(ctx, "client"):
        print(f"\nDELETE refused with HTTP {ctx.error_code}")


if __name__ == "__main__":
    main()
