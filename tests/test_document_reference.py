from __future__ import annotations

from typing import Any

import pytest

from pyfiremock import (
    Converter,
    DocumentSnapshot,
    FieldPath,
    FiremockInvalidArgumentError,
    FiremockNotFoundError,
    FiremockUnsupportedOptionError,
    MockApp,
    MockFirestore,
)


def _firestore() -> MockFirestore:
    return MockApp().firestore()


def _converter(stored: dict[str, Any]) -> Converter[Any]:
    return Converter(
        to_firestore=lambda _value: stored,
        from_firestore=lambda data, _options: ("converted", data),
    )


def test_exposes_firestore_id_path_and_parent() -> None:
    firestore = _firestore()
    doc = firestore.doc("foo/bar")

    assert doc.firestore is firestore
    assert doc.id == "bar"
    assert doc.path == "/foo/bar"
    assert doc.parent.path == "/foo"


@pytest.mark.asyncio
async def test_shares_data_with_other_handles() -> None:
    firestore = _firestore()
    doc1 = firestore.doc("foo/bar")
    await doc1.set({"foo": "bar"})

    doc2 = firestore.doc("foo/bar")
    assert doc1 is not doc2
    assert (await doc2.get()).data() == {"foo": "bar"}


def test_collection_returns_child_collection() -> None:
    doc = _firestore().doc("foo/bar")
    assert doc.collection("baz").path == "/foo/bar/baz"


@pytest.mark.asyncio
async def test_get_snapshot_is_point_in_time() -> None:
    ref = _firestore().doc("foo/bar")
    await ref.set({"foo": "bar"})

    snapshot = await ref.get()
    assert snapshot.ref is ref
    assert snapshot.data() == {"foo": "bar"}

    await ref.set({"bar": "baz"})
    assert snapshot.data() == {"foo": "bar"}


@pytest.mark.asyncio
async def test_get_on_missing_document_resolves_without_data() -> None:
    snapshot = await _firestore().doc("foo/missing").get()
    assert snapshot.exists is False
    assert snapshot.data() is None


def test_is_equal_requires_same_firestore() -> None:
    assert not _firestore().doc("foo/bar").is_equal(_firestore().doc("foo/bar"))


def test_is_equal_requires_same_path() -> None:
    firestore = _firestore()
    assert not firestore.doc("foo/bar").is_equal(firestore.doc("bar/bar"))


def test_is_equal_requires_same_converter() -> None:
    firestore = _firestore()
    other = firestore.doc("foo/bar").with_converter(_converter({}))
    assert not firestore.doc("foo/bar").is_equal(other)


def test_is_equal_otherwise() -> None:
    firestore = _firestore()
    assert firestore.doc("foo/bar").is_equal(firestore.doc("foo/bar"))
    assert firestore.doc("foo/bar") == firestore.doc("foo/bar")
    assert len({firestore.doc("foo/bar"), firestore.doc("/foo//bar/")}) == 1


def test_with_converter_does_not_mutate_receiver() -> None:
    firestore = _firestore()
    doc = firestore.doc("foo/bar")
    converter = _converter({})

    converted = doc.with_converter(converter)

    assert converted.converter is converter
    assert converted.parent.converter is converter
    assert doc.converter is not converter
    assert converted.with_converter(None) == doc


_LISTENER_SHAPES = {
    "listener": lambda doc, on_next: doc.on_snapshot(on_next),
    "listener_callbacks": lambda doc, on_next: doc.on_snapshot(on_next, None, None),
    "options_listener": lambda doc, on_next: doc.on_snapshot({}, on_next),
    "observer": lambda doc, on_next: doc.on_snapshot({"next": on_next}),
    "options_observer": lambda doc, on_next: doc.on_snapshot({}, {"next": on_next}),
}


@pytest.mark.asyncio
@pytest.mark.parametrize("shape", sorted(_LISTENER_SHAPES))
async def test_on_snapshot_emits_current_state_right_away(shape: str) -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []

    _LISTENER_SHAPES[shape](doc, seen.append)

    assert seen == [await doc.get()]


@pytest.mark.asyncio
@pytest.mark.parametrize("shape", sorted(_LISTENER_SHAPES))
async def test_on_snapshot_disposer_stops_delivery(shape: str) -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []

    disposer = _LISTENER_SHAPES[shape](doc, seen.append)
    disposer()
    disposer()
    await doc.set({"bla": "blabla"})

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_on_snapshot_unsubscribe_leaves_other_listeners() -> None:
    doc = _firestore().doc("foo/bar")
    first: list[DocumentSnapshot] = []
    second: list[DocumentSnapshot] = []

    registration = doc.on_snapshot(first.append)
    doc.on_snapshot(second.append)
    registration.unsubscribe()
    await doc.set({"a": 1})

    assert len(first) == 1
    assert len(second) == 2
    assert second[-1].data() == {"a": 1}


@pytest.mark.asyncio
async def test_same_callback_registered_twice_is_removed_once() -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []

    registration = doc.on_snapshot(seen.append)
    doc.on_snapshot(seen.append)
    registration()
    await doc.set({"a": 1})

    assert len(seen) == 3


@pytest.mark.asyncio
async def test_listener_registered_inside_callback_skips_in_flight_event() -> None:
    doc = _firestore().doc("foo/bar")
    late: list[DocumentSnapshot] = []
    registered: list[bool] = []

    def on_next(snapshot: DocumentSnapshot) -> None:
        if snapshot.exists and not registered:
            registered.append(True)
            doc.on_snapshot(late.append)

    doc.on_snapshot(on_next)
    await doc.set({"a": 1})

    # Only the immediate delivery on registration.
    assert len(late) == 1
    await doc.set({"a": 2})
    assert len(late) == 2


@pytest.mark.asyncio
async def test_listener_failure_goes_to_error_callback() -> None:
    doc = _firestore().doc("foo/bar")
    errors: list[BaseException] = []
    others: list[DocumentSnapshot] = []

    def on_next(snapshot: DocumentSnapshot) -> None:
        if snapshot.exists:
            raise RuntimeError("boom")

    doc.on_snapshot(on_next, errors.append)
    doc.on_snapshot(others.append)
    await doc.set({"a": 1})

    assert [str(exc) for exc in errors] == ["boom"]
    assert len(others) == 2


def test_on_snapshot_without_next_fails() -> None:
    doc = _firestore().doc("foo/bar")
    with pytest.raises(FiremockInvalidArgumentError):
        doc.on_snapshot({})
    with pytest.raises(FiremockInvalidArgumentError):
        doc.on_snapshot({}, {"error": print})


@pytest.mark.asyncio
async def test_set_overwrites_by_default() -> None:
    doc = _firestore().doc("foo/bar")

    await doc.set({"bla": "blabla"})
    await doc.set({"bar": "baz"})

    assert (await doc.get()).data() == {"bar": "baz"}


@pytest.mark.asyncio
async def test_set_merges_top_level_keys() -> None:
    doc = _firestore().doc("foo/bar")

    await doc.set({"bla": "blabla", "nested": {"a": 1, "b": 2}})
    await doc.set({"bar": "baz", "nested": {"c": 3}}, merge=True)

    assert (await doc.get()).data() == {
        "bla": "blabla",
        "bar": "baz",
        "nested": {"c": 3},
    }


@pytest.mark.asyncio
async def test_set_merge_accepts_options_mapping_and_absent_document() -> None:
    doc = _firestore().doc("foo/bar")

    await doc.set({"bar": "baz"}, {"merge": True})

    assert (await doc.get()).data() == {"bar": "baz"}


@pytest.mark.asyncio
async def test_set_merge_is_idempotent() -> None:
    firestore = _firestore()
    once = firestore.doc("a/once")
    twice = firestore.doc("a/twice")
    for doc in (once, twice):
        await doc.set({"keep": True, "value": 1})

    await once.set({"value": 2, "extra": {"x": 1}}, merge=True)
    await twice.set({"value": 2, "extra": {"x": 1}}, merge=True)
    await twice.set({"value": 2, "extra": {"x": 1}}, merge=True)

    assert firestore.store.get(once.path) == firestore.store.get(twice.path)


def test_set_merge_fields_is_unsupported() -> None:
    doc = _firestore().doc("foo/bar")

    with pytest.raises(FiremockUnsupportedOptionError) as excinfo:
        doc.set({"a": 1}, merge_fields=["a"])
    with pytest.raises(FiremockUnsupportedOptionError):
        doc.set({"a": 1}, {"mergeFields": ["a"]})

    assert excinfo.value.option == "merge_fields"
    assert doc.get().result().exists is False


@pytest.mark.asyncio
async def test_set_parses_data_with_converter() -> None:
    doc = _firestore().doc("foo/bar")
    converted = doc.with_converter(_converter({"super": "fun"}))

    await converted.set({"foo": "bar"})

    assert (await doc.get()).data() == {"super": "fun"}
    assert (await converted.get()).data() == ("converted", {"super": "fun"})


def test_set_rejects_non_mapping_data() -> None:
    doc = _firestore().doc("foo/bar")
    with pytest.raises(FiremockInvalidArgumentError):
        doc.set(["not", "a", "mapping"])


@pytest.mark.asyncio
async def test_set_copies_input() -> None:
    doc = _firestore().doc("foo/bar")
    payload = {"nested": {"a": 1}}

    await doc.set(payload)
    payload["nested"]["a"] = 2

    assert (await doc.get()).get("nested.a") == 1


@pytest.mark.asyncio
async def test_set_emits_snapshot_events() -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.set({"bla": "blabla"})

    # 1 for registration, 1 for the write
    assert len(seen) == 2
    assert seen[-1].data() == {"bla": "blabla"}


@pytest.mark.asyncio
async def test_set_with_equal_data_does_not_emit() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"bla": "blabla"})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.set({"bla": "blabla"})
    await doc.set({"bla": "blabla"}, merge=True)

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_set_emits_on_parent_collection() -> None:
    firestore = _firestore()
    coll = firestore.collection("foo")
    seen: list[Any] = []
    coll.on_snapshot(seen.append)

    await coll.doc("bar").set({"bla": "blabla"})

    assert len(seen) == 2


def test_write_effects_apply_without_awaiting() -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    doc.set({"a": 1})

    assert seen[-1].data() == {"a": 1}


@pytest.mark.asyncio
async def test_update_patches_existing_data_deeply() -> None:
    ref = _firestore().doc("foo/bar")
    await ref.set({"foo": 123, "bar": {"bar": 456}, "baz": 789, "qux": False})

    await ref.update({"foo.foo": "foo", "bar.otherBar": "otherBar", "baz": "baz"})

    assert (await ref.get()).data() == {
        "foo": {"foo": "foo"},
        "bar": {"bar": 456, "otherBar": "otherBar"},
        "baz": "baz",
        "qux": False,
    }


@pytest.mark.asyncio
async def test_update_accepts_field_path_keys() -> None:
    ref = _firestore().doc("foo/bar")
    await ref.set({"a": {"b.c": 1, "d": 2}})

    await ref.update({FieldPath("a", "b.c"): 10})

    assert (await ref.get()).data() == {"a": {"b.c": 10, "d": 2}}


@pytest.mark.asyncio
async def test_update_fails_when_document_is_missing() -> None:
    completion = _firestore().doc("foo/bar").update({"baz": "yes"})

    with pytest.raises(FiremockNotFoundError) as excinfo:
        await completion
    assert excinfo.value.path == "/foo/bar"


@pytest.mark.asyncio
async def test_update_missing_document_stays_absent() -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    completion = doc.update({"baz": "yes"})

    assert not completion.ok
    assert (await doc.get()).exists is False
    assert len(seen) == 1


def test_update_by_field_is_unsupported() -> None:
    doc = _firestore().doc("foo/bar")
    doc.set({"a": 1})

    with pytest.raises(FiremockUnsupportedOptionError):
        doc.update("a", 2)
    with pytest.raises(FiremockUnsupportedOptionError):
        doc.update(FieldPath("a"), 2)


@pytest.mark.asyncio
async def test_update_emits_snapshot_events() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"bla": "blabla"})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.update({"bla": "BLA"})

    assert len(seen) == 2


@pytest.mark.asyncio
async def test_update_emits_on_parent_collection() -> None:
    firestore = _firestore()
    coll = firestore.collection("foo")
    doc = coll.doc("bar")
    await doc.set({"bla": "blabla"})
    seen: list[Any] = []
    coll.on_snapshot(seen.append)

    await doc.update({"bla": "BLA"})

    assert len(seen) == 2


@pytest.mark.asyncio
async def test_update_without_changes_does_not_emit() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"bla": "blabla"})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.update({"bla": "blabla"})

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_set_stores_value_with_new_type() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"flag": 1})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.set({"flag": True})

    snapshot = await doc.get()
    assert snapshot.data()["flag"] is True
    assert len(seen) == 2
    assert seen[-1].get("flag") is True


@pytest.mark.asyncio
async def test_update_stores_value_with_new_type() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"n": {"x": 1}})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.update({"n.x": 1.0})

    snapshot = await doc.get()
    assert type(snapshot.get("n.x")) is float
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_delete_removes_document_data() -> None:
    firestore = _firestore()
    doc1 = firestore.doc("foo/bar")
    doc2 = firestore.doc("foo/bar")

    await doc1.set({"baz": "qux"})
    doc2.delete()

    assert (await doc1.get()).exists is False


@pytest.mark.asyncio
async def test_delete_emits_when_document_exists() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"baz": "qux"})
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.delete()

    assert len(seen) == 2
    assert seen[-1].exists is False


@pytest.mark.asyncio
async def test_delete_missing_document_does_not_emit() -> None:
    doc = _firestore().doc("foo/bar")
    seen: list[DocumentSnapshot] = []
    doc.on_snapshot(seen.append)

    await doc.delete()

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_delete_emits_on_parent_collection() -> None:
    firestore = _firestore()
    coll = firestore.collection("foo")
    doc = coll.doc("bar")
    await doc.set({"bla": "blabla"})
    seen: list[Any] = []
    coll.on_snapshot(seen.append)

    await doc.delete()

    assert len(seen) == 2


@pytest.mark.asyncio
async def test_recreate_after_delete() -> None:
    doc = _firestore().doc("foo/bar")
    await doc.set({"a": 1})
    await doc.delete()
    await doc.set({"b": 2})

    assert (await doc.get()).data() == {"b": 2}
