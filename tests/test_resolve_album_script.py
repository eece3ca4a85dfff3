from __future__ import annotations

import json

from metadata.types import ResultRecord
from scripts import resolve_album


class _FakeResolver:
    def __init__(self) -> None:
        self.queries: list[str] = []

    async def resolve(self, query: str) -> ResultRecord:
        self.queries.append(query)
        return ResultRecord(
            display_text="Abbey Road is the eleventh studio album by the Beatles.",
            image_url="https://upload.example/orig.jpg",
            query=query,
        )


def test_cli_joins_words_and_prints_text(monkeypatch, capsys) -> None:
    resolver = _FakeResolver()
    monkeypatch.setattr(resolve_album, "build_default_resolver", lambda: resolver)

    assert resolve_album.main(["Abbey", "Road"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert resolver.queries == ["Abbey Road"]
    assert out == [
        "Abbey Road is the eleventh studio album by the Beatles.",
        "image=https://upload.example/orig.jpg",
    ]


def test_cli_json_output(monkeypatch, capsys) -> None:
    monkeypatch.setattr(resolve_album, "build_default_resolver", _FakeResolver)

    assert resolve_album.main(["--json", "Abbey Road"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["query"] == "Abbey Road"
    assert payload["imageUrl"] == "https://upload.example/orig.jpg"
    assert payload["thumbnail"] is None


def test_cli_passes_query_verbatim(monkeypatch, capsys) -> None:
    resolver = _FakeResolver()
    monkeypatch.setattr(resolve_album, "build_default_resolver", lambda: resolver)

    assert resolve_album.main(["Abbey Road "]) == 0

    capsys.readouterr()
    assert resolver.queries == ["Abbey Road "]
