"""
Integration tests for moving permissions from a server to a client.
"""

import asyncio
from types import SimpleNamespace

import pytest
from unittest.mock import MagicMock

from permix import (
    Permix, create_permix_adapter, dehydrate_json, hydrate_json, template
)

# Rule sets a host application would define once at import time
ADMIN = template({
    "post": {"create": True, "read": True, "update": True, "delete": True},
    "comment": {"create": True, "read": True},
})

AUTHOR = template(lambda user: {
    "post": {
        "create": True,
        "read": True,
        "update": lambda post: post["author_id"] == user["id"],
        "delete": False,
    },
    "comment": {"create": True, "read": True},
})


def rules_for(user):
    return ADMIN() if user["role"] == "admin" else AUTHOR(user)


class TestServerClientFlow:
    """Server renders with rules, client continues with wire state."""

    @pytest.fixture
    def adapter(self):
        """Adapter storing the instance on a request object."""
        return create_permix_adapter(
            set_permix=lambda req, permix: setattr(req, "permix", permix),
            get_permix=lambda req: getattr(req, "permix", None),
            client_context=False,
        )

    @pytest.mark.asyncio
    async def test_author_request_round_trip(self, adapter):
        """Predicates gate the server; the client sees them as denied."""
        request = SimpleNamespace(user={"id": "1", "role": "author"})

        await adapter.setup_function(request, lambda req: rules_for(req.user))

        assert adapter.check_function(request, "post", "update", {"author_id": "1"}) is True
        assert adapter.check_function(request, "post", "update", {"author_id": "2"}) is False
        assert adapter.check_function(request, "post", "delete") is False

        payload = dehydrate_json(request.permix)

        client = Permix(client_context=True)
        ready = MagicMock()
        client.hook("ready", ready)
        hydrate_json(client, payload)

        assert client.check("post", ["create", "read"]) is True
        assert client.check("post", "update", {"author_id": "1"}) is False
        assert client.check("comment", "all") is True
        ready.assert_not_called()

    @pytest.mark.asyncio
    async def test_admin_request_round_trip(self, adapter):
        """Boolean-only rules arrive unchanged."""
        request = SimpleNamespace(user={"id": "9", "role": "admin"})

        await adapter.setup_function(request, lambda req: rules_for(req.user))
        client = Permix()
        hydrate_json(client, dehydrate_json(request.permix))

        assert client.check("post", "all") is True
        assert client.get_rules() == ADMIN()

    @pytest.mark.asyncio
    async def test_client_waits_for_its_own_setup(self):
        """Hydrated clients still wait on check_async until they set up."""
        server = Permix(client_context=False)
        server.setup(ADMIN)

        client = Permix(client_context=True)
        hydrate_json(client, dehydrate_json(server))

        pending = [
            asyncio.create_task(client.check_async("post", "delete")),
            asyncio.create_task(client.is_ready_async()),
        ]
        await asyncio.sleep(0)
        assert not any(task.done() for task in pending)

        await client.setup_async(lambda: AUTHOR({"id": "1"}))

        results = await asyncio.wait_for(asyncio.gather(*pending), timeout=1)
        assert results == [False, True]

    @pytest.mark.asyncio
    async def test_concurrent_requests_are_isolated(self, adapter):
        """Each request gets its own instance."""
        requests = [
            SimpleNamespace(user={"id": "1", "role": "author"}),
            SimpleNamespace(user={"id": "2", "role": "admin"}),
        ]

        await asyncio.gather(*(
            adapter.setup_function(req, lambda r: rules_for(r.user))
            for req in requests
        ))

        assert adapter.check_function(requests[0], "post", "delete") is False
        assert adapter.check_function(requests[1], "post", "delete") is True
