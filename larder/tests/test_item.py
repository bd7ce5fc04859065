from datetime import date, timedelta
import math
import unittest
from larder.domain.Batch import Batch
from larder.domain.Item import Item
from larder.domain.errors import InvalidArgumentError


def batch_sum(item):
    return math.fsum(b.amount for b in item.batches)


class TestItem(unittest.TestCase):

    def setUp(self):
        self.day0 = date(2025, 1, 1)
        self.item = Item("Milk", "Dairy", "L", Batch(1, 5.0, self.day0 + timedelta(days=5)))

    def test_create_requires_fields(self):
        batch = Batch(1, 1.0, self.day0)
        for args in (("", "Dairy", "L"), ("Milk", " ", "L"), ("Milk", "Dairy", None)):
            with self.assertRaises(InvalidArgumentError):
                Item(*args, batch)
        with self.assertRaises(InvalidArgumentError):
            Item("Milk", "Dairy", "L", None)

    def test_add_batch_sorts_by_expiration(self):
        self.item.add_batch(Batch(2, 5.0, self.day0 + timedelta(days=1)))
        self.item.add_batch(Batch(3, 5.0, self.day0 + timedelta(days=9)))
        dates = [b.expiration_date for b in self.item.batches]
        self.assertEqual(dates, sorted(dates))
        self.assertEqual(self.item.total_amount, 6.0)
        self.assertEqual(self.item.earliest_expiration, self.day0 + timedelta(days=1))

    def test_add_batch_rejects_none(self):
        with self.assertRaises(InvalidArgumentError):
            self.item.add_batch(None)

    def test_sort_is_idempotent(self):
        self.item.add_batch(Batch(2, 5.0, self.day0))
        before = [(b.amount, b.expiration_date) for b in self.item.batches]
        self.item.sort_batches()
        self.item.sort_batches()
        self.assertEqual([(b.amount, b.expiration_date) for b in self.item.batches], before)

    def test_batches_are_read_only_copies(self):
        view = self.item.batches
        view[0].reduce(0.5)
        self.assertEqual(self.item.total_amount, 1.0)
        self.assertEqual(self.item.batches[0].amount, 1.0)
        self.assertIsInstance(view, tuple)

    def test_same_batch_added_twice_is_stored_twice(self):
        batch = Batch(5, 1.0, self.day0)
        item = Item("Flour", "Baking", "g", batch)
        item.add_batch(batch)
        self.assertEqual(item.total_amount, 10.0)
        item.consume(3)
        self.assertEqual(item.total_amount, 7.0)
        self.assertEqual(batch_sum(item), 7.0)
        self.assertEqual([b.amount for b in item.batches], [2.0, 5.0])
        self.assertEqual(batch.amount, 5.0)

    def test_caller_batch_is_not_shared(self):
        batch = Batch(5, 1.0, self.day0)
        item = Item("Flour", "Baking", "g", batch)
        batch.reduce(4)
        self.assertEqual(item.total_amount, 5.0)
        self.assertEqual(batch_sum(item), 5.0)
        other = Item("Sugar", "Baking", "g", batch)
        other.consume(1)
        self.assertEqual(item.total_amount, 5.0)
        self.assertEqual(batch.amount, 1.0)

    def test_consume_rejects_non_finite_amounts(self):
        for amount in (float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(InvalidArgumentError):
                self.item.consume(amount)
        self.assertEqual(self.item.total_amount, 1.0)
        self.assertEqual(batch_sum(self.item), 1.0)

    def test_consume_same_date_uses_insertion_order(self):
        item = Item("Milk", "Dairy", "L", Batch(1, 5.0, self.day0))
        item.add_batch(Batch(5, 5.0, self.day0))
        self.assertEqual(item.total_amount, 6.0)
        self.assertEqual(item.batch_count, 2)
        item.consume(2)
        self.assertEqual(item.total_amount, 4.0)
        self.assertEqual(len(item.batches), 1)
        self.assertEqual(item.batches[0].amount, 4.0)

    def test_consume_is_fefo(self):
        late = self.day0 + timedelta(days=20)
        early = self.day0 + timedelta(days=2)
        self.item.add_batch(Batch(3, 5.0, late))
        self.item.add_batch(Batch(2, 5.0, early))
        touched = self.item.consume(2.5)
        self.assertEqual([b.expiration_date for b, _ in touched], [early, self.day0 + timedelta(days=5)])
        self.assertEqual([amount for _, amount in touched], [2.0, 0.5])
        self.assertEqual([b.expiration_date for b in self.item.batches],
                         [self.day0 + timedelta(days=5), late])
        self.assertAlmostEqual(self.item.batches[0].amount, 0.5)

    def test_conservation_over_sequence(self):
        steps = [("add", 2.5, 3), ("consume", 0.7), ("add", 0.3, 1), ("consume", 1.1),
                 ("add", 4.0, 10), ("consume", 3.3), ("consume", 0.1)]
        expected = 1.0
        for step in steps:
            if step[0] == "add":
                self.item.add_batch(Batch(step[1], 1.0, self.day0 + timedelta(days=step[2])))
                expected += step[1]
            else:
                self.item.consume(step[1])
                expected -= step[1]
            self.assertAlmostEqual(self.item.total_amount, batch_sum(self.item))
            self.assertAlmostEqual(self.item.total_amount, expected)
            self.assertGreaterEqual(self.item.total_amount, 0)

    def test_round_trip(self):
        item = Item("Rice", "Grains", "kg", Batch(2, 1.0, self.day0))
        item.consume(2)
        self.assertEqual(item.total_amount, 0)
        self.assertEqual(item.batches, ())
        self.assertTrue(item.is_empty())
        self.assertIsNone(item.earliest_expiration)

    def test_consume_boundaries(self):
        self.item.add_batch(Batch(0.5, 1.0, self.day0))
        with self.assertRaises(InvalidArgumentError):
            self.item.consume(self.item.total_amount + 0.0001)
        for bad in (0, -1):
            with self.assertRaises(InvalidArgumentError):
                self.item.consume(bad)
        self.assertEqual(self.item.total_amount, 1.5)
        self.item.consume(self.item.total_amount)
        self.assertEqual(self.item.batches, ())

    def test_consume_float_fractions(self):
        item = Item("Flour", "Baking", "kg", Batch(0.1, 1.0, self.day0))
        item.add_batch(Batch(0.2, 1.0, self.day0 + timedelta(days=1)))
        item.consume(0.3)
        self.assertTrue(item.is_empty())

    def test_depleted_listener(self):
        seen = []
        self.item.on_depleted(seen.append)
        self.item.consume(0.5)
        self.assertEqual(seen, [])
        self.item.consume(0.5)
        self.assertEqual(seen, [self.item])

    def test_value(self):
        self.item.add_batch(Batch(2, 3.0, self.day0 - timedelta(days=1)))
        self.assertAlmostEqual(self.item.value, 11.0)
        self.assertAlmostEqual(self.item.expired_value(self.day0), 6.0)

    def test_from_dict_and_to_dict(self):
        item = Item.from_dict({
            "name": "Eggs", "category": "Dairy", "unit": "pcs",
            "batches": [
                {"amount": 6, "unit_price": 3, "expiration_date": "2025-01-10"},
                {"amount": 12, "unit_price": 3, "expiration_date": "2025-01-05"},
            ],
        })
        data = item.to_dict()
        self.assertEqual(data["total_amount"], 18.0)
        self.assertEqual(data["earliest_expiration"], "2025-01-05")
        self.assertEqual([b["amount"] for b in data["batches"]], [12.0, 6.0])
        with self.assertRaises(InvalidArgumentError):
            Item.from_dict({"name": "Eggs", "category": "Dairy", "unit": "pcs"})
