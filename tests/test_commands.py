# tests/test_commands.py

from __future__ import annotations

import pytest

from tracker_linker.cli.commands import CommandRegistry, registry

from .conftest import BASE_URL


@pytest.mark.asyncio
async def test_command_registry_routes_sync_and_async_handlers(state) -> None:
    reg = CommandRegistry()
    called = {"sync": 0, "async": 0}

    def h_sync(state, args, emit):
        called["sync"] += 1
        return "sync"

    async def h_async(state, args, emit):
        called["async"] += 1
        if emit is not None:
            emit("note")
        return "async:" + ",".join(args)

    reg.register("a", h_sync, "a")
    reg.register("b", h_async, "b", aliases=["bb"])

    assert await reg.handle(state, "/a x") == "sync"
    assert await reg.handle(state, "/bb y z", emit=lambda _: None) == "async:y,z"
    assert called == {"sync": 1, "async": 1}


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_convert_command_links_bare_references(state) -> None:
    state.document.set_value("see ABC-1 later")

    reply = await registry.handle(state, "/convert")

    assert reply == "Links converted."
    assert state.document.get_value() == f"see [ABC-1]({BASE_URL}ABC-1) later"
    assert await registry.handle(state, "/c") == "Nothing to convert."


@pytest.mark.asyncio
async def test_show_and_status(state) -> None:
    assert await registry.handle(state, "/show") == "Document is empty."
    state.document.set_value("one\ntwo")
    assert await registry.handle(state, "/show") == "1 | one\n2 | two"

    status = await registry.handle(state, "/status") or ""
    assert BASE_URL in status
    assert "Credentials: configured" in status
    assert "alice, bob" in status
    assert "Controller: idle" in status


@pytest.mark.asyncio
async def test_save_command(state, tmp_path) -> None:
    assert "Usage" in (await registry.handle(state, "/save") or "")

    state.document.set_value("notes")
    target = tmp_path / "out.md"
    assert await registry.handle(state, f"/save {target}") == f"Saved to {target}."
    assert target.read_text("utf-8") == "notes"
