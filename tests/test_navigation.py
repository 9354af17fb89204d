import asyncio

from archive_zero.navigation import Navigator, resolve_location


def test_resolve_location():
    assert resolve_location("https://example.org/", "z-001.html") == "https://example.org/z-001.html"
    assert resolve_location(".", "index.html") == "./index.html"


def test_schedule_is_fire_and_forget():
    opened = []
    nav = Navigator(base="https://example.org", opener=opened.append)

    async def _go():
        nav.schedule("z-001.html", 0.01)
        assert nav.requests == []
        await nav.drain()

    asyncio.run(_go())
    assert nav.requests == ["z-001.html"]
    assert opened == ["https://example.org/z-001.html"]
