# tests for mock id generation

import pytest

from mediview.services.ids import SequentialIdGenerator, UuidIdGenerator, make_id_generator


class TestSequentialIds:
    """prefix_n ids"""

    def test_counter_shared_across_prefixes(self):
        ids = SequentialIdGenerator()
        assert ids.next_id("mc") == "mc_1"
        assert ids.next_id("note") == "note_2"
        assert ids.next_id("mc") == "mc_3"

    def test_custom_start(self):
        ids = SequentialIdGenerator(start=10)
        assert ids.next_id("pat") == "pat_11"


class TestUuidIds:
    """random ids"""

    def test_prefix_and_uniqueness(self):
        ids = UuidIdGenerator()
        generated = {ids.next_id("med") for _ in range(50)}
        assert len(generated) == 50
        assert all(i.startswith("med_") for i in generated)


class TestMakeIdGenerator:
    """strategy lookup"""

    def test_known_strategies(self):
        assert isinstance(make_id_generator("sequence"), SequentialIdGenerator)
        assert isinstance(make_id_generator("uuid"), UuidIdGenerator)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            make_id_generator("snowflake")
