"""
Tests for the Slot value type and SlotTable mapping.
"""

import pytest
from startup_gen.errors import SlotRangeError
from startup_gen.slots import Slot, SlotTable


class TestSlot:
    def test_index_offset(self):
        assert Slot(-16).index == 0
        assert Slot(-14).index == 2
        assert Slot(0).index == 16
        assert Slot(495).index == 511

    @pytest.mark.parametrize("irqn", [-17, -100, 496, 512])
    def test_out_of_range_rejected(self, irqn):
        with pytest.raises(SlotRangeError):
            Slot(irqn)

    def test_range_error_is_value_error(self):
        with pytest.raises(ValueError):
            Slot(1000)

    def test_kinds(self):
        assert not Slot(-16).is_core
        assert Slot(-14).is_core and Slot(-1).is_core
        assert not Slot(-15).is_core
        assert not Slot(0).is_core

    def test_ordering(self):
        assert sorted([Slot(3), Slot(-5), Slot(0)]) == [Slot(-5), Slot(0), Slot(3)]


class TestSlotTable:
    def test_set_and_get(self):
        t = SlotTable()
        t.set(Slot(0), "WWDG_IRQ")
        assert t.get(Slot(0)) == "WWDG_IRQ"
        assert t.get(Slot(1)) is None

    def test_last_write_wins(self):
        t = SlotTable()
        t.set(Slot(5), "A_IRQ")
        t.set(Slot(5), "B_IRQ")
        assert t.get(Slot(5)) == "B_IRQ"
        assert len(t) == 1

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            SlotTable().set(Slot(0), "")

    def test_iteration_sorted(self):
        t = SlotTable({Slot(7): "G", Slot(-3): "C", Slot(0): "A"})
        assert [s.irqn for s, _ in t.items()] == [-3, 0, 7]
        assert [s.irqn for s, _ in t.core_items()] == [-3]

    def test_reserved_slots_not_core(self):
        t = SlotTable({Slot(-15): "Reset_", Slot(-14): "NMI_"})
        assert [s.irqn for s, _ in t.core_items()] == [-14]

    def test_copy_is_independent(self):
        t = SlotTable({Slot(0): "A"})
        c = t.copy()
        c.set(Slot(1), "B")
        assert c != t
        assert len(t) == 1
