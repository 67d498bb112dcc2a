"""Tests for Entity, filters and the identity capability."""

from __future__ import annotations

import pytest

from simplenosql import Entity, Filter, IdentifiedModel, IdentityAssignable, ValidationError, where
from tests.conftest import Album, SampleBean


class TestEntity:
    def test_key_and_data(self):
        bean = SampleBean(name="x")
        entity = Entity("bucket", "e1", bean)
        assert entity.bucket == "bucket"
        assert entity.id == "e1"
        assert entity.key == ("bucket", "e1")
        assert entity.data is bean

    def test_data_attached_after_construction(self):
        entity: Entity[SampleBean] = Entity("bucket", "e1")
        assert entity.data is None
        entity.data = SampleBean(name="later")
        assert entity.data.name == "later"

    def test_key_is_immutable(self):
        entity = Entity("bucket", "e1")
        with pytest.raises(AttributeError):
            entity.bucket = "other"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            entity.id = "other"  # type: ignore[misc]

    def test_none_bucket_rejected(self):
        with pytest.raises(ValidationError):
            Entity(None, "e1")  # type: ignore[arg-type]

    def test_none_id_rejected(self):
        with pytest.raises(ValidationError):
            Entity("bucket", None)  # type: ignore[arg-type]

    def test_equality_includes_payload(self):
        a = Entity("b", "e", {"n": 1})
        assert a == Entity("b", "e", {"n": 1})
        assert a != Entity("b", "e", {"n": 2})
        assert a != Entity("b", "other", {"n": 1})
        assert hash(a) == hash(Entity("b", "e", {"n": 2}))

    def test_repr(self):
        assert repr(Entity("b", "e")) == "Entity(bucket='b', id='e', data=None)"


class TestFilters:
    def test_where_wraps_callable(self):
        flt = where(lambda e: e.data["keep"])
        assert isinstance(flt, Filter)
        assert flt.included(Entity("b", "1", {"keep": True}))
        assert not flt.included(Entity("b", "2", {"keep": False}))

    def test_custom_filter_satisfies_protocol(self):
        class OnlyIdOne:
            def included(self, entity):
                return entity.id == "1"

        assert isinstance(OnlyIdOne(), Filter)


class TestIdentity:
    def test_identified_model_is_identity_assignable(self):
        album = Album(title="Kid A")
        assert isinstance(album, IdentityAssignable)
        assert album.id is None
        album.set_id("a1")
        assert album.id == "a1"

    def test_plain_model_is_not_identity_assignable(self):
        assert not isinstance(SampleBean(name="x"), IdentityAssignable)

    def test_subclass_must_implement_set_id(self):
        class Broken(IdentityAssignable):
            pass

        with pytest.raises(TypeError):
            Broken()  # type: ignore[abstract]

    def test_identified_model_subclass_round_trips(self):
        class Track(IdentifiedModel):
            name: str

        track = Track.model_validate_json('{"name": "Airbag"}')
        track.set_id("t9")
        assert track.model_dump() == {"id": "t9", "name": "Airbag"}
