from datetime import date, timedelta
import unittest
from larder.domain.Batch import Batch
from larder.domain.Inventory import Inventory, new_inventory
from larder.domain.Item import Item
from larder.domain.errors import AlreadyExistsError, InvalidArgumentError, NotFoundError
from larder.events.Event_Bus import EventBus, INVENTORY_BATCH_DISCARDED, INVENTORY_ITEM_DEPLETED


class TestInventory(unittest.TestCase):

    def setUp(self):
        self.today = date(2025, 6, 1)
        self.bus = EventBus()
        self.events = []
        for name in (INVENTORY_ITEM_DEPLETED, INVENTORY_BATCH_DISCARDED):
            self.bus.subscribe(name, lambda evt, payload: self.events.append((evt, payload)))
        self.inventory = new_inventory(self.bus)
        self.apple = Item("Apple", "Fruit", "kg", Batch(1.0, 30.0, self.today + timedelta(days=6)))
        self.milk = Item("Milk", "Dairy", "L", Batch(2.0, 20.0, self.today + timedelta(days=2)))
        self.cheese = Item("Cheese", "dairy", "g", Batch(400, 0.1, self.today + timedelta(days=2)))
        for item in (self.apple, self.milk, self.cheese):
            self.inventory.add(item)

    def test_add_and_get(self):
        self.assertIsInstance(self.inventory, Inventory)
        self.assertEqual(len(self.inventory), 3)
        self.assertIs(self.inventory.get_by_name("Milk"), self.milk)
        self.assertIn("Milk", self.inventory)

    def test_add_duplicate_and_none(self):
        with self.assertRaises(AlreadyExistsError):
            self.inventory.add(Item("Milk", "Dairy", "L", Batch(1, 1, self.today)))
        with self.assertRaises(InvalidArgumentError):
            self.inventory.add(None)

    def test_get_by_name_errors(self):
        with self.assertRaises(NotFoundError):
            self.inventory.get_by_name("Butter")
        with self.assertRaises(InvalidArgumentError):
            self.inventory.get_by_name("  ")
        with self.assertRaises(NotFoundError):
            self.inventory.get_by_name("milk")

    def test_get_by_name_ignore_case(self):
        self.assertIs(self.inventory.get_by_name("milk", ignore_case=True), self.milk)

    def test_get_by_name_ignore_case_prefers_exact_then_first_added(self):
        lower = Item("milk", "Dairy", "L", Batch(1.0, 20.0, self.today))
        self.inventory.add(lower)
        self.assertIs(self.inventory.get_by_name("milk", ignore_case=True), lower)
        self.assertIs(self.inventory.get_by_name("MILK", ignore_case=True), self.milk)

    def test_remove(self):
        self.inventory.remove(self.milk)
        self.assertNotIn("Milk", self.inventory)
        with self.assertRaises(NotFoundError):
            self.inventory.remove(self.milk)
        self.inventory.remove("Apple")
        self.assertEqual(self.inventory.all_items(), [self.cheese])

    def test_remove_all_items(self):
        self.inventory.remove_all_items()
        self.assertEqual(len(self.inventory), 0)

    def test_orderings(self):
        self.assertEqual([i.name for i in self.inventory.all_items_alphabetical()],
                         ["Apple", "Cheese", "Milk"])
        self.assertEqual([i.name for i in self.inventory.all_items_by_expiration()],
                         ["Cheese", "Milk", "Apple"])

    def test_by_category_is_case_insensitive(self):
        self.assertEqual({i.name for i in self.inventory.by_category("DAIRY")}, {"Milk", "Cheese"})
        self.assertEqual(self.inventory.by_category("Meat"), [])
        with self.assertRaises(InvalidArgumentError):
            self.inventory.by_category("")

    def test_expiring_queries(self):
        due = self.today + timedelta(days=2)
        self.assertEqual(self.inventory.expiring_before(due), [])
        self.assertEqual({i.name for i in self.inventory.expiring_on(due)}, {"Milk", "Cheese"})
        self.assertEqual({i.name for i in self.inventory.expiring_before(due + timedelta(days=1))},
                         {"Milk", "Cheese"})
        with self.assertRaises(InvalidArgumentError):
            self.inventory.expiring_before(None)

    def test_expiring_uses_earliest_batch(self):
        self.apple.add_batch(Batch(0.2, 30.0, self.today))
        self.assertEqual(self.inventory.expiring_on(self.today), [self.apple])

    def test_add_batch_to_item(self):
        self.inventory.add_batch_to_item("Milk", Batch(1.0, 20.0, self.today + timedelta(days=1)))
        self.assertEqual(self.milk.total_amount, 3.0)
        with self.assertRaises(NotFoundError):
            self.inventory.add_batch_to_item("Butter", Batch(1.0, 1.0, self.today))

    def test_consume_item_prunes_empty_item(self):
        self.inventory.consume_item(self.milk, 1.5)
        self.assertIn("Milk", self.inventory)
        self.inventory.consume_item("Milk", 0.5)
        self.assertNotIn("Milk", self.inventory)
        self.assertEqual(self.events, [(INVENTORY_ITEM_DEPLETED, {"item": self.milk})])

    def test_direct_item_consume_is_pruned(self):
        self.cheese.consume(400)
        self.assertNotIn("Cheese", self.inventory)

    def test_consume_item_rejected_leaves_state(self):
        with self.assertRaises(InvalidArgumentError):
            self.inventory.consume_item("Milk", 2.5)
        self.assertEqual(self.milk.total_amount, 2.0)
        with self.assertRaises(NotFoundError):
            self.inventory.consume_item("Butter", 1)

    def test_removed_item_is_no_longer_tracked(self):
        self.inventory.remove(self.milk)
        self.milk.consume(2.0)
        self.assertEqual(self.events, [])

    def test_remove_expired_before_keeps_fresh_batch(self):
        inventory = Inventory(self.bus)
        item = Item("Apple", "Fruit", "kg", Batch(0.6, 30.0, self.today - timedelta(days=5)))
        item.add_batch(Batch(1.0, 30.0, self.today + timedelta(days=4)))
        inventory.add(item)
        discarded = inventory.remove_expired_before(self.today)
        self.assertEqual(item.total_amount, 1.0)
        self.assertEqual(len(item.batches), 1)
        self.assertEqual([(name, b.amount) for name, b in discarded], [("Apple", 0.6)])
        self.assertEqual(self.events[-1][0], INVENTORY_BATCH_DISCARDED)

    def test_remove_expired_before_removes_single_batch_items(self):
        self.milk.add_batch(Batch(1.0, 20.0, self.today - timedelta(days=3)))
        discarded = self.inventory.remove_expired_before(self.today + timedelta(days=3))
        self.assertEqual(sorted(name for name, _ in discarded), ["Cheese", "Milk", "Milk"])
        self.assertEqual([i.name for i in self.inventory.all_items()], ["Apple"])

    def test_remove_expired_before_nothing_expired(self):
        self.assertEqual(self.inventory.remove_expired_before(self.today), [])
        self.assertEqual(len(self.inventory), 3)

    def test_to_dict_is_alphabetical(self):
        self.assertEqual([d["name"] for d in self.inventory.to_dict()], ["Apple", "Cheese", "Milk"])
