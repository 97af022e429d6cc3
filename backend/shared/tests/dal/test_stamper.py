from datetime import UTC

from shared.dal.stamper import RecordStamper, SystemStamper


class TestSystemStamper:
    def test_ids_are_unique_hex(self):
        stamper = SystemStamper()
        ids = {stamper.new_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(len(i) == 32 and int(i, 16) >= 0 for i in ids)

    def test_now_is_utc_and_monotonic_enough(self):
        stamper = SystemStamper()
        first = stamper.now()
        second = stamper.now()
        assert first.tzinfo is UTC
        assert second >= first

    def test_satisfies_protocol(self):
        stamper: RecordStamper = SystemStamper()
        assert callable(stamper.new_id)
        assert callable(stamper.now)
