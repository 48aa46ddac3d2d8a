import pytest

from asterproxy.crc import crc16
from asterproxy.slots import SLOTS_COUNT, SlotTable, slot_for_key


def test_slot_for_key_in_range():
    for key in (b"", b"a", b"foo", b"123456789", b"some:long:key"):
        assert 0 <= slot_for_key(key) < SLOTS_COUNT


def test_slot_for_key_known_value():
    assert slot_for_key(b"foo") == 12182


def test_slot_for_key_uses_crc16():
    assert slot_for_key(b"123456789", b"", 1 << 16) == 0x31C3


def test_hash_tag_groups_keys():
    assert slot_for_key(b"{user}a", b"{}") == slot_for_key(b"{user}b", b"{}")
    assert slot_for_key(b"{user}a", b"{}") == slot_for_key(b"user", b"{}")


def test_empty_hash_tag_body_uses_whole_key():
    assert slot_for_key(b"abc{}de", b"{}") == crc16(b"abc{}de") % SLOTS_COUNT


def test_slot_for_key_bad_count():
    with pytest.raises(ValueError):
        slot_for_key(b"a", b"", 0)


def test_default_table_is_empty():
    table = SlotTable()
    assert table.get_master(0) == ""
    assert table.get_replica(0) == ""
    assert table.all_masters() == set()
    assert table.get_master(SLOTS_COUNT) is None


def test_try_update_all_reports_change():
    table = SlotTable(slots_count=4)
    masters = ["m1", "m1", "m2", "m2"]
    replicas = [["r1"], ["r1"], ["r2"], ["r2"]]
    assert table.try_update_all(masters, replicas) is True
    assert table.try_update_all(masters, replicas) is False
    assert table.all_masters() == {"m1", "m2"}
    assert table.all_replicas() == {"r1", "r2"}
    assert [table.get_master(i) for i in range(4)] == masters


def test_try_update_all_replica_change_only():
    table = SlotTable(slots_count=2)
    table.try_update_all(["m", "m"], [[], []])
    assert table.try_update_all(["m", "m"], [["r"], []]) is True
    assert table.get_replica(0) == "r"


def test_update_slot():
    table = SlotTable(slots_count=2)
    table.try_update_all(["a", "a"], [])
    assert table.update_slot(1, "b") is True
    assert table.update_slot(1, "b") is False
    assert table.get_master(1) == "b"
    assert table.is_master("a") and table.is_master("b")
    assert not table.is_master("c")


def test_replica_round_robin():
    table = SlotTable(slots_count=1)
    table.try_update_all(["m"], [["r1", "r2", "r3"]])
    seen = [table.get_replica(0) for _ in range(6)]
    assert seen == ["r1", "r2", "r3", "r1", "r2", "r3"]


def test_get_addr_reads_from_replica():
    table = SlotTable(slots_count=2, read_from_slave=True)
    table.try_update_all(["m1", "m2"], [["r1"], []])
    assert table.get_addr(0, True) == "r1"
    assert table.get_addr(0, False) == "m1"
    assert table.get_addr(1, True) == "m2"


def test_get_addr_ignores_replica_when_disabled():
    table = SlotTable(slots_count=1)
    table.try_update_all(["m1"], [["r1"]])
    assert table.get_addr(0, True) == "m1"


def test_get_addr_out_of_range():
    table = SlotTable(slots_count=1)
    with pytest.raises(LookupError):
        table.get_addr(5, False)


def test_all_addrs():
    table = SlotTable(slots_count=2, read_from_slave=True)
    table.try_update_all(["m1", "m2"], [["r1"], ["r2"]])
    assert table.all_addrs(True) == {"r1", "r2"}
    assert table.all_addrs(False) == {"m1", "m2"}
    plain = SlotTable(slots_count=2)
    plain.try_update_all(["m1", "m2"], [["r1"], ["r2"]])
    assert plain.all_addrs(True) == {"m1", "m2"}