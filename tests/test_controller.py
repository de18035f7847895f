"""Tests for the step primitives and the working sequence."""

import numpy as np
import pytest

from stepsort import Element, InvalidValue, Role, Step, WorkingSequence, run_blocking

from conftest import drive, no_sleep


class TestMarking:
    def test_mark_and_unmark(self, make_ctl) -> None:
        ctl = make_ctl([1, 2, 3])
        ctl.mark(1, Role.PIVOT)
        assert ctl.sequence.roles() == [Role.NORMAL, Role.PIVOT, Role.NORMAL]
        ctl.unmark(1)
        assert ctl.sequence.roles() == [Role.NORMAL] * 3

    def test_mark_defaults_to_active(self, make_ctl) -> None:
        ctl = make_ctl([1, 2])
        ctl.mark(0)
        assert ctl.sequence[0].role is Role.ACTIVE

    def test_out_of_range_is_ignored(self, make_ctl) -> None:
        ctl = make_ctl([1, 2])
        ctl.mark(-1)
        ctl.mark(2, Role.CANDIDATE)
        ctl.unmark(5)
        assert ctl.sequence.roles() == [Role.NORMAL, Role.NORMAL]

    def test_done_is_terminal(self, make_ctl) -> None:
        ctl = make_ctl([4, 5])
        ctl.finish(0)
        ctl.mark(0, Role.ACTIVE)
        ctl.unmark(0)
        assert ctl.sequence[0].role is Role.DONE


class TestCompare:
    def test_pauses_then_answers(self, make_ctl) -> None:
        ctl = make_ctl([5, 3])
        result, steps = drive(ctl.compare(0, 1))
        assert result is True
        assert steps == [Step("compare", (0, 1))]
        assert ctl.stats.pauses == 1
        assert ctl.stats.comparisons == 1

    def test_strictly_greater(self, make_ctl) -> None:
        ctl = make_ctl([3, 3, 7])
        assert drive(ctl.compare(0, 1))[0] is False
        assert drive(ctl.compare(0, 2))[0] is False
        assert drive(ctl.compare(2, 0))[0] is True

    def test_out_of_range_is_false_after_pause(self, make_ctl) -> None:
        ctl = make_ctl([1])
        result, steps = drive(ctl.compare(0, 1))
        assert result is False
        assert len(steps) == 1


class TestSwap:
    def test_swaps_values_not_roles(self, make_ctl) -> None:
        ctl = make_ctl([1, 9])
        ctl.mark(0, Role.CANDIDATE)
        _, steps = drive(ctl.swap(0, 1))
        assert steps == [Step("swap", (0, 1))]
        assert ctl.sequence.values() == [9, 1]
        assert ctl.sequence.roles() == [Role.CANDIDATE, Role.NORMAL]
        assert ctl.stats.swaps == 1

    def test_out_of_range_exchanges_nothing(self, make_ctl) -> None:
        ctl = make_ctl([1, 9])
        _, steps = drive(ctl.swap(1, 2))
        assert len(steps) == 1
        assert ctl.sequence.values() == [1, 9]
        assert ctl.stats.swaps == 0

    def test_overwrite(self, make_ctl) -> None:
        ctl = make_ctl([1, 9])
        _, steps = drive(ctl.overwrite(1, 4))
        drive(ctl.overwrite(7, 4))
        assert steps == [Step("write", (1,))]
        assert ctl.sequence.values() == [1, 4]
        assert ctl.stats.writes == 1
        assert ctl.stats.pauses == 2


class TestWorkingSequence:
    def test_capture_coerces_to_int(self) -> None:
        seq = WorkingSequence.capture([3.0, 7, np.int64(2)])
        assert seq.values() == [3, 7, 2]
        assert all(type(v) is int for v in seq.values())
        assert not seq.all_done()

    @pytest.mark.parametrize("bad", [2.5, "7", None, True, 1j, float("nan"), float("inf")])
    def test_capture_rejects_non_integers(self, bad) -> None:
        with pytest.raises(InvalidValue):
            WorkingSequence.capture([1, bad])

    def test_fractional_values_are_not_truncated(self) -> None:
        with pytest.raises(InvalidValue):
            run_blocking("bubble", [2.5, 1.5, 2.9], 0, sleep=no_sleep)

    def test_empty_sequence_is_done(self) -> None:
        assert WorkingSequence.capture([]).all_done()

    def test_listener_sees_each_change(self, make_ctl) -> None:
        ctl = make_ctl([2, 1])
        seen = []
        ctl.sequence.subscribe(lambda i, e: seen.append((i, e.value, e.role)))
        ctl.mark(0)
        ctl.mark(0)  # unchanged role, no event
        drive(ctl.swap(0, 1))
        ctl.finish(1)
        assert seen == [
            (0, 2, Role.ACTIVE),
            (0, 1, Role.ACTIVE),
            (1, 2, Role.NORMAL),
            (1, 2, Role.DONE),
        ]

    def test_unsubscribed_listener_is_silent(self, make_ctl) -> None:
        ctl = make_ctl([2, 1])
        seen = []
        listener = lambda i, e: seen.append(i)
        ctl.sequence.subscribe(listener)
        ctl.mark(1)
        ctl.sequence.unsubscribe(listener)
        ctl.mark(0)
        drive(ctl.swap(0, 1))
        assert seen == [1]

    def test_element_repr(self) -> None:
        assert repr(Element(3, Role.PIVOT)) == "Element(3, PIVOT)"
