"""Unit tests for amount distribution"""

import pytest
from schedule_engine.domain.distribution import distribute_even, distribute_on_edit, smart_distribute
from schedule_engine.domain.exceptions import InvalidArgumentError
from schedule_engine.domain.models import PaymentStatus
from schedule_engine.domain.validation import validate


def amounts(items):
    return [i.current_due_amount_cents for i in items]


def test_distribute_even_rounding_remainder(empty_schedule):
    """Last installment absorbs the rounding remainder"""
    items = distribute_even(100000, empty_schedule)

    assert amounts(items) == [33333, 33333, 33334]
    assert sum(amounts(items)) == 100000


def test_distribute_even_rounds_half_up(empty_schedule):
    """200.00 / 3 = 66.666... -> 66.67, 66.67, 66.66"""
    items = distribute_even(20000, empty_schedule)
    assert amounts(items) == [6667, 6667, 6666]


def test_distribute_even_tiny_pool_never_negative(make_item):
    items = distribute_even(2, [make_item(n) for n in range(1, 5)])
    assert sum(amounts(items)) == 2
    assert all(a >= 0 for a in amounts(items))


def test_distribute_even_keeps_locked_amounts(make_item):
    schedule = [
        make_item(1, due_cents=50000, paid_cents=50000, status=PaymentStatus.PAID),
        make_item(2),
        make_item(3),
    ]
    items = distribute_even(100000, schedule)

    assert amounts(items) == [50000, 25000, 25000]
    assert items[0] is schedule[0]


def test_distribute_even_skips_explicitly_locked(make_item):
    schedule = [make_item(1, due_cents=10000, locked=True), make_item(2), make_item(3)]
    items = distribute_even(30000, schedule)
    assert amounts(items) == [10000, 10000, 10000]


def test_distribute_even_without_editable_items_is_unchanged(make_item):
    schedule = [make_item(1, due_cents=100, paid_cents=100, status=PaymentStatus.PAID)]
    assert distribute_even(500, schedule) == schedule


def test_distribute_even_does_not_mutate_input(empty_schedule):
    distribute_even(100000, empty_schedule)
    assert amounts(empty_schedule) == [0, 0, 0]


def test_distribute_even_rejects_locked_over_total(make_item):
    schedule = [make_item(1, due_cents=5000, locked=True), make_item(2)]
    with pytest.raises(InvalidArgumentError):
        distribute_even(4000, schedule)


def test_distribute_on_edit_splits_rest(empty_schedule):
    items = distribute_on_edit(100000, empty_schedule, 0, 40000)
    assert amounts(items) == [40000, 30000, 30000]


def test_distribute_on_edit_global_mode_touches_earlier_items(make_item):
    schedule = distribute_even(90000, [make_item(n) for n in (1, 2, 3)])
    items = distribute_on_edit(90000, schedule, 2, 10000)
    assert amounts(items) == [40000, 40000, 10000]


def test_distribute_on_edit_ignores_locked_target(make_item):
    schedule = [
        make_item(1, due_cents=30000, paid_cents=10000, status=PaymentStatus.PARTIALLY_PAID),
        make_item(2, due_cents=30000),
    ]
    assert distribute_on_edit(60000, schedule, 0, 5000) == schedule


def test_distribute_on_edit_only_item_applies_edit(make_item):
    items = distribute_on_edit(50000, [make_item(1, due_cents=50000)], 0, 45000)
    assert amounts(items) == [45000]


def test_distribute_on_edit_rejects_overcommit(empty_schedule):
    with pytest.raises(InvalidArgumentError):
        distribute_on_edit(100000, empty_schedule, 1, 150000)


@pytest.mark.parametrize("index", [-1, 3])
def test_distribute_on_edit_rejects_bad_index(empty_schedule, index):
    with pytest.raises(InvalidArgumentError):
        distribute_on_edit(100000, empty_schedule, index, 100)


def test_distribute_on_edit_rejects_negative_amount(empty_schedule):
    with pytest.raises(InvalidArgumentError):
        distribute_on_edit(100000, empty_schedule, 0, -1)


def test_smart_distribute_forward_only(make_item):
    schedule = distribute_even(120000, [make_item(n) for n in (1, 2, 3, 4)])
    items = smart_distribute(120000, schedule, 1, 20000)

    # first installment untouched; 120000 - 30000 - 20000 split over #3 and #4
    assert amounts(items) == [30000, 20000, 35000, 35000]
    assert sum(amounts(items)) == 120000


def test_smart_distribute_skips_later_locked_items(make_item):
    """Later editable installments share total - sum(up to the edit); the last keeps the total exact"""
    schedule = [
        make_item(1, due_cents=25000),
        make_item(2, due_cents=25000),
        make_item(3, due_cents=25000, paid_cents=25000, status=PaymentStatus.PAID),
        make_item(4, due_cents=25000),
    ]
    items = smart_distribute(100000, schedule, 0, 10000)

    assert amounts(items) == [10000, 45000, 25000, 20000]
    assert sum(amounts(items)) == 100000


def test_smart_distribute_rejects_when_later_locked_amounts_overflow(make_item):
    schedule = [
        make_item(1, due_cents=10000),
        make_item(2, due_cents=10000),
        make_item(3, due_cents=70000, paid_cents=70000, status=PaymentStatus.PAID),
        make_item(4, due_cents=10000),
    ]
    with pytest.raises(InvalidArgumentError):
        smart_distribute(100000, schedule, 0, 10000)


def test_smart_distribute_last_item_leaves_schedule_imbalanced(make_item):
    """No later editable installments: edit applies and the validator flags it"""
    schedule = distribute_even(90000, [make_item(n) for n in (1, 2, 3)])
    items = smart_distribute(90000, schedule, 2, 20000)

    assert amounts(items) == [30000, 30000, 20000]
    result = validate(items, 90000)
    assert not result.ok
    assert any("Total amount mismatch" in e for e in result.errors)


def test_smart_distribute_ignores_non_editable_target(make_item):
    schedule = [make_item(1, due_cents=100, status=PaymentStatus.OVERDUE), make_item(2, due_cents=100)]
    assert smart_distribute(200, schedule, 0, 50) == schedule
