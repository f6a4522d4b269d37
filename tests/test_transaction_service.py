"""Tests for the transaction service: CRUD, listing, and dashboard totals."""

import pytest
from datetime import date
from decimal import Decimal

from moneymind.domain.entities import TransactionType
from moneymind.domain.errors import NotFoundError, ValidationError
from moneymind.domain.query import build_transaction_query


@pytest.fixture
def many_transactions(transaction_service, alice):
    """23 expenses with distinct amounts and dates."""
    return [
        transaction_service.create_transaction(
            alice,
            amount=Decimal(n * 10),
            type="expense",
            category=f"Cat{n:02d}",
            date=date(2024, 1, n),
        )
        for n in range(1, 24)
    ]


class TestCreateTransaction:
    """Tests for creating transactions."""

    def test_create_and_get(self, transaction_service, alice):
        txn = transaction_service.create_transaction(
            alice, amount="1,250.50", type="Expense", category=" Rent ", date="2024-03-01"
        )

        fetched = transaction_service.get_transaction(alice, txn.id)
        assert fetched == txn
        assert txn.user_id == alice.user_id
        assert txn.amount == Decimal("1250.50")
        assert txn.type == TransactionType.EXPENSE
        assert txn.category == "Rent"
        assert txn.date == date(2024, 3, 1)
        assert txn.note == ""

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"amount": None}, "amount"),
            ({"amount": "abc"}, "amount"),
            ({"amount": "-5"}, "amount"),
            ({"type": "transfer"}, "type"),
            ({"type": ""}, "type"),
            ({"category": "   "}, "category"),
            ({"category": "x" * 51}, "category"),
            ({"date": "not a date"}, "date"),
            ({"date": None}, "date"),
        ],
    )
    def test_validation_names_field(self, transaction_service, alice, overrides, field):
        fields = {"amount": "10", "type": "income", "category": "Gift", "date": "2024-01-01"}
        fields.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            transaction_service.create_transaction(alice, **fields)
        assert exc_info.value.field == field

    def test_zero_amount_allowed(self, transaction_service, alice):
        txn = transaction_service.create_transaction(
            alice, amount=0, type="expense", category="Free", date=date(2024, 1, 1)
        )
        assert txn.amount == Decimal("0")

    @pytest.mark.parametrize("amount", ["10.005", 0.001, Decimal("1.239"), "10000000000", "99999999999.99"])
    def test_amount_outside_stored_precision(self, transaction_service, alice, amount):
        with pytest.raises(ValidationError) as exc_info:
            transaction_service.create_transaction(
                alice, amount=amount, type="expense", category="Odd", date=date(2024, 1, 1)
            )
        assert exc_info.value.field == "amount"

    def test_largest_stored_amount(self, transaction_service, alice):
        txn = transaction_service.create_transaction(
            alice, amount="9999999999.99", type="income", category="Lottery", date=date(2024, 1, 1)
        )
        assert txn.amount == Decimal("9999999999.99")

    def test_trailing_zeros_are_exact(self, transaction_service, alice):
        txn = transaction_service.create_transaction(
            alice, amount="12.500", type="income", category="Gift", date=date(2024, 1, 1)
        )
        assert txn.amount == Decimal("12.50")


class TestOwnership:
    """Another user's transactions behave as if they did not exist."""

    def test_get_other_users_transaction(self, transaction_service, sample_transactions, bob):
        with pytest.raises(NotFoundError):
            transaction_service.get_transaction(bob, sample_transactions[0].id)

    def test_update_other_users_transaction(self, transaction_service, sample_transactions, alice, bob):
        target = sample_transactions[1]
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(bob, target.id, amount="1")
        assert transaction_service.get_transaction(alice, target.id).amount == Decimal("300")

    def test_delete_other_users_transaction(self, transaction_service, sample_transactions, alice, bob):
        target = sample_transactions[2]
        with pytest.raises(NotFoundError):
            transaction_service.delete_transaction(bob, target.id)
        assert transaction_service.get_transaction(alice, target.id) == target

    def test_missing_transaction(self, transaction_service, alice):
        with pytest.raises(NotFoundError, match="Transaction 999 not found"):
            transaction_service.delete_transaction(alice, 999)

    def test_bob_sees_nothing(self, transaction_service, sample_transactions, bob):
        page = transaction_service.list_transactions(bob, build_transaction_query())
        assert page.items == ()
        assert page.total == 0
        assert page.total_pages == 0


class TestUpdateTransaction:
    """Tests for partial updates."""

    def test_only_given_fields_change(self, transaction_service, sample_transactions, alice):
        original = sample_transactions[2]
        updated = transaction_service.update_transaction(alice, original.id, category="Groceries")

        assert updated.category == "Groceries"
        assert updated.amount == original.amount
        assert updated.note == "groceries"
        assert updated.date == original.date

    def test_invalid_field_writes_nothing(self, transaction_service, sample_transactions, alice):
        original = sample_transactions[0]
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(alice, original.id, category="Bonus", amount="-1")
        assert transaction_service.get_transaction(alice, original.id).category == "Salary"

    def test_clear_note(self, transaction_service, sample_transactions, alice):
        updated = transaction_service.update_transaction(alice, sample_transactions[2].id, note="")
        assert updated.note == ""


class TestListTransactions:
    """Tests for paginated listing."""

    def test_default_page(self, transaction_service, many_transactions, alice):
        page = transaction_service.list_transactions(alice, build_transaction_query())

        assert len(page.items) == 10
        assert page.total == 23
        assert page.total_pages == 3
        # Newest date first
        assert page.items[0].date == date(2024, 1, 23)

    def test_last_page_is_partial(self, transaction_service, many_transactions, alice):
        page = transaction_service.list_transactions(alice, build_transaction_query(page=3))
        assert len(page.items) == 3
        assert page.page == 3

    def test_page_past_the_end(self, transaction_service, many_transactions, alice):
        page = transaction_service.list_transactions(alice, build_transaction_query(page=4))
        assert page.items == ()
        assert page.total == 23
        assert page.total_pages == 3

    def test_pages_partition_the_result(self, transaction_service, many_transactions, alice):
        seen = []
        for number in range(1, 4):
            query = build_transaction_query(page=number, limit=10, sort_by="amount", order="asc")
            seen.extend(t.id for t in transaction_service.list_transactions(alice, query).items)

        assert len(seen) == len(set(seen)) == 23

    def test_amount_orders_are_reversed(self, transaction_service, many_transactions, alice):
        asc = transaction_service.list_transactions(
            alice, build_transaction_query(limit=100, sort_by="amount", order="asc")
        )
        desc = transaction_service.list_transactions(
            alice, build_transaction_query(limit=100, sort_by="amount", order="desc")
        )

        assert [t.id for t in asc.items] == [t.id for t in reversed(desc.items)]
        assert [t.amount for t in asc.items] == sorted(t.amount for t in asc.items)

    def test_unknown_sort_falls_back_to_newest_first(self, transaction_service, many_transactions, alice):
        page = transaction_service.list_transactions(
            alice, build_transaction_query(sort_by="hacker", order="asc")
        )
        dates = [t.date for t in page.items]
        assert dates == sorted(dates, reverse=True)

    def test_sort_by_category(self, transaction_service, sample_transactions, alice):
        page = transaction_service.list_transactions(
            alice, build_transaction_query(sort_by="category", order="asc")
        )
        assert [t.category for t in page.items] == ["Food", "Rent", "Salary"]

    def test_type_filter_counts_only_matches(self, transaction_service, sample_transactions, alice):
        page = transaction_service.list_transactions(alice, build_transaction_query(type="expense"))
        assert page.total == 2
        assert all(t.type == TransactionType.EXPENSE for t in page.items)

        everything = transaction_service.list_transactions(alice, build_transaction_query(type="bogus"))
        assert everything.total == 3

    def test_search(self, transaction_service, sample_transactions, alice):
        page = transaction_service.list_transactions(alice, build_transaction_query(search="GROC"))
        assert [t.category for t in page.items] == ["Food"]

    def test_invalid_pagination_uses_defaults(self, transaction_service, many_transactions, alice):
        page = transaction_service.list_transactions(
            alice, build_transaction_query(page="-2", limit="zero")
        )
        assert page.page == 1
        assert page.limit == 10
        assert len(page.items) == 10


class TestDashboard:
    """Tests for summary, monthly, and recent views."""

    def test_summary(self, transaction_service, sample_transactions, alice):
        summary = transaction_service.get_summary(alice)

        assert summary.income == Decimal("1000")
        assert summary.expense == Decimal("500")
        assert summary.balance == Decimal("500")
        assert summary.count == 3

    def test_summary_ignores_other_users(self, transaction_service, sample_transactions, bob):
        summary = transaction_service.get_summary(bob)
        assert summary.balance == Decimal("0")
        assert summary.count == 0

    def test_monthly(self, transaction_service, sample_transactions, alice):
        buckets = transaction_service.get_monthly(alice)

        assert len(buckets) == 12
        assert (buckets[0].month, buckets[0].income, buckets[0].expense) == ("Jan", 1000, 300)
        assert (buckets[1].month, buckets[1].expense) == ("Feb", 200)
        assert all(b.expense == 0 and b.income == 0 for b in buckets[2:])

    def test_monthly_for_other_year(self, transaction_service, sample_transactions, alice):
        buckets = transaction_service.get_monthly(alice, year=2023)
        assert all(b.expense == 0 and b.income == 0 for b in buckets)

    def test_recent(self, transaction_service, sample_transactions, alice):
        recent = transaction_service.recent_transactions(alice, count=2)
        assert [t.category for t in recent] == ["Food", "Rent"]
