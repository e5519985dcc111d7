import base64
import json
from pathlib import Path

import pytest
from morphir_deps.classification import classify_permissive, classify_restrictive, encode_data_url
from morphir_deps.errors import DocumentDecodeError, LocalDependencyNotFound, UriNotFoundError
from morphir_deps.loading.local import LocalDependencyLoader, load_local
from morphir_deps.models import IndexedDependency, Provenance


def _local(raw: str, source: Provenance = Provenance.LOCAL_DEPENDENCIES):
    return classify_permissive(raw, source)


class _BrokenFetcher:
    async def fetch(self, url: object) -> bytes:
        raise RuntimeError("transport exploded")


@pytest.mark.asyncio
async def test_load_path_dependency(write_json) -> None:
    path = write_json("a.json", {"y": 1})
    documents = await load_local([_local(str(path))])
    assert len(documents) == 1
    assert documents[0].payload == {"y": 1}
    assert documents[0].source is Provenance.LOCAL_DEPENDENCIES


@pytest.mark.asyncio
async def test_relative_paths_resolve_against_base_dir(tmp_path: Path, write_json) -> None:
    write_json("deps/b.json", {"z": 1})
    documents = await load_local([_local("./deps/b.json")], base_dir=tmp_path)
    assert documents[0].payload == {"z": 1}


@pytest.mark.asyncio
async def test_missing_path_carries_exact_path(tmp_path: Path) -> None:
    missing = str(tmp_path / "nope" / "ir.json")
    with pytest.raises(LocalDependencyNotFound) as excinfo:
        await load_local([_local(missing)])
    assert excinfo.value.path_or_url == missing
    assert missing in str(excinfo.value)


@pytest.mark.asyncio
async def test_file_url_dependency(write_json) -> None:
    path = write_json("c.json", ["Library", ["morphir"]])
    dependency = classify_restrictive(path.as_uri())
    documents = await load_local([dependency])
    assert documents[0].payload == ["Library", ["morphir"]]
    assert documents[0].source is Provenance.DEPENDENCIES


@pytest.mark.asyncio
async def test_missing_file_url_is_retagged(tmp_path: Path) -> None:
    url = (tmp_path / "missing.json").as_uri()
    with pytest.raises(LocalDependencyNotFound) as excinfo:
        await load_local([classify_restrictive(url)])
    assert excinfo.value.path_or_url == url
    assert isinstance(excinfo.value.__cause__, UriNotFoundError)


@pytest.mark.asyncio
async def test_other_transport_errors_propagate_unchanged() -> None:
    loader = LocalDependencyLoader(fetcher=_BrokenFetcher())  # type: ignore[arg-type]
    with pytest.raises(RuntimeError, match="transport exploded"):
        await loader.load([classify_restrictive("file:///tmp/whatever.json")])


@pytest.mark.asyncio
async def test_invalid_json_is_a_decode_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentDecodeError) as excinfo:
        await load_local([_local(str(path))])
    assert excinfo.value.origin == str(path)


@pytest.mark.asyncio
async def test_data_url_round_trip() -> None:
    payload = {"formatVersion": 3, "distribution": ["Library", ["my", "pkg"], [], {}]}
    dependency = classify_restrictive(encode_data_url(payload, charset="utf-8"))
    documents = await load_local([dependency])
    assert documents[0].payload == payload


@pytest.mark.asyncio
async def test_data_url_charset_is_respected() -> None:
    dependency = classify_restrictive("data:application/json;charset=iso-8859-1,%22caf%E9%22")
    documents = await load_local([dependency])
    assert documents[0].payload == "café"


@pytest.mark.asyncio
async def test_unknown_charset_falls_back_to_utf8() -> None:
    body = json.dumps({"name": "café"}, ensure_ascii=False).encode("utf-8").hex()
    encoded = "".join(f"%{body[i : i + 2]}" for i in range(0, len(body), 2))
    dependency = classify_restrictive(f"data:application/json;charset=klingon,{encoded}")
    documents = await load_local([dependency])
    assert documents[0].payload == {"name": "café"}


@pytest.mark.asyncio
async def test_indices_are_preserved(write_json) -> None:
    first = write_json("first.json", 1)
    second = write_json("second.json", 2)
    items = [
        IndexedDependency(index=7, dependency=_local(str(first))),
        IndexedDependency(index=3, dependency=_local(str(second))),
    ]
    documents = await LocalDependencyLoader().load(items)
    assert [(doc.index, doc.payload) for doc in documents] == [(7, 1), (3, 2)]


@pytest.mark.asyncio
async def test_remote_descriptor_is_rejected() -> None:
    with pytest.raises(ValueError, match="Not a local dependency"):
        await load_local([_local("https://example.com/ir.json")])  # type: ignore[list-item]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url",
    [
        "data:,%7B%22x%22%3A%22caf%C3%A9%22%7D",
        "data:;base64," + base64.b64encode('{"x":"café"}'.encode()).decode("ascii"),
    ],
)
async def test_data_url_without_media_type_decodes_as_utf8(url: str) -> None:
    dependency = classify_restrictive(url)
    assert dependency is not None
    documents = await load_local([dependency])
    assert documents[0].payload == {"x": "café"}


@pytest.mark.asyncio
@pytest.mark.parametrize("label", ["hex", "zlib", "base64", "rot13"])
async def test_non_text_charset_label_falls_back_to_utf8(label: str) -> None:
    dependency = classify_restrictive(
        f"data:application/json;charset={label},%7B%22x%22%3A%22caf%C3%A9%22%7D"
    )
    documents = await load_local([dependency])
    assert documents[0].payload == {"x": "café"}
