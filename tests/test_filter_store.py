import threading
import time
import unittest
from datetime import date

from dashfilters.services.filter_definitions import (
    ALL_YEARS,
    MONTH_FILTER_KEY,
    YEAR_FILTER_KEY,
    month_filter,
    year_filter,
)
from dashfilters.services.filter_store import (
    FilterNotReadyError,
    FilterState,
    FilterStore,
    InvalidFilterValueError,
)
from dashfilters.services.storage import InMemoryStorage


def june_15():
    return date(2025, 6, 15)


class FlakyStorage(InMemoryStorage):
    def __init__(self, initial=None, fail_get=False, fail_set=False):
        super().__init__(initial)
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.get_calls = 0
        self.set_calls = 0

    def get(self, key):
        self.get_calls += 1
        if self.fail_get:
            raise PermissionError('storage access denied')
        return super().get(key)

    def set(self, key, value):
        self.set_calls += 1
        if self.fail_set:
            raise OSError('quota exceeded')
        super().set(key, value)


class BlockingStorage(InMemoryStorage):
    """Holds the write of one value until released."""

    def __init__(self, blocked_value):
        super().__init__()
        self.blocked_value = blocked_value
        self.entered = threading.Event()
        self.release = threading.Event()

    def set(self, key, value):
        if value == self.blocked_value:
            self.entered.set()
            self.release.wait(timeout=5)
        super().set(key, value)


class MonthFilterStoreTests(unittest.TestCase):
    def _store(self, storage):
        return FilterStore(month_filter('fr'), storage, clock=june_15)

    def test_no_value_before_hydration(self):
        store = self._store(InMemoryStorage({MONTH_FILTER_KEY: '11'}))
        self.assertEqual(store.state, FilterState.UNINITIALIZED)
        self.assertIsNone(store.current_value())
        self.assertIsNone(store.value)
        self.assertIsNone(store.snapshot()['value'])

    def test_empty_storage_uses_current_month_and_persists_it(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        self.assertEqual(store.hydrate(), '6')
        self.assertEqual(store.state, FilterState.READY)
        self.assertEqual(store.current_value(), '6')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '6')

    def test_stored_value_wins_over_default(self):
        storage = InMemoryStorage({MONTH_FILTER_KEY: '11'})
        store = self._store(storage)
        store.hydrate()
        self.assertEqual(store.current_value(), '11')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '11')

    def test_empty_or_invalid_stored_value_falls_back_to_default(self):
        for stored in ['', '13', 'juin']:
            store = self._store(InMemoryStorage({MONTH_FILTER_KEY: stored}))
            store.hydrate()
            self.assertEqual(store.current_value(), '6', stored)

    def test_read_failure_falls_back_to_default(self):
        storage = FlakyStorage({MONTH_FILTER_KEY: '11'}, fail_get=True)
        store = self._store(storage)
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING'):
            store.hydrate()
        self.assertEqual(store.current_value(), '6')
        self.assertEqual(storage.as_dict()[MONTH_FILTER_KEY], '6')

    def test_hydration_runs_once(self):
        storage = FlakyStorage({MONTH_FILTER_KEY: '2'})
        store = self._store(storage)
        store.hydrate()
        storage.set(MONTH_FILTER_KEY, '9')
        self.assertEqual(store.hydrate(), '2')
        self.assertEqual(storage.get_calls, 1)
        self.assertEqual(store.current_value(), '2')

    def test_set_value_before_hydration_is_rejected(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        with self.assertRaises(FilterNotReadyError):
            store.set_value('3')
        self.assertIsNone(storage.get(MONTH_FILTER_KEY))
        self.assertIsNone(store.current_value())

    def test_set_value_updates_memory_and_storage(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        self.assertEqual(store.set_value('3'), '3')
        self.assertEqual(store.current_value(), '3')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '3')

    def test_write_failure_keeps_in_memory_value(self):
        storage = FlakyStorage()
        store = self._store(storage)
        store.hydrate()
        storage.fail_set = True
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING') as logs:
            store.set_value('3')
        self.assertEqual(store.current_value(), '3')
        self.assertEqual(storage.as_dict()[MONTH_FILTER_KEY], '6')
        self.assertTrue(any('failed to write' in line for line in logs.output))

    def test_write_failure_during_hydration_is_not_fatal(self):
        store = self._store(FlakyStorage(fail_get=True, fail_set=True))
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING'):
            store.hydrate()
        self.assertEqual(store.state, FilterState.READY)
        self.assertEqual(store.current_value(), '6')

    def test_invalid_value_is_rejected_and_value_kept(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        with self.assertRaises(InvalidFilterValueError):
            store.set_value('0')
        with self.assertRaises(ValueError):
            store.set_value('12 ')
        self.assertEqual(store.current_value(), '6')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '6')

    def test_last_write_wins(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        store.set_value('1')
        store.set_value('12')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '12')

    def test_overlapping_writes_leave_storage_matching_memory(self):
        storage = BlockingStorage(blocked_value='3')
        store = self._store(storage)
        store.hydrate()

        first = threading.Thread(target=store.set_value, args=('3',))
        first.start()
        self.assertTrue(storage.entered.wait(timeout=5))
        second = threading.Thread(target=store.set_value, args=('4',))
        second.start()
        time.sleep(0.05)
        storage.release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        self.assertEqual(store.current_value(), '4')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '4')

    def test_refresh_adopts_value_written_elsewhere(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        seen = []
        store.subscribe(lambda key, value: seen.append(value))
        storage.set(MONTH_FILTER_KEY, '2')
        self.assertEqual(store.refresh(), '2')
        self.assertEqual(store.current_value(), '2')
        self.assertEqual(seen, ['2'])

    def test_refresh_keeps_memory_when_storage_is_empty_invalid_or_failing(self):
        storage = FlakyStorage()
        store = self._store(storage)
        store.hydrate()
        storage.set(MONTH_FILTER_KEY, '13')
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING'):
            self.assertEqual(store.refresh(), '6')
        storage.clear()
        self.assertEqual(store.refresh(), '6')
        storage.fail_get = True
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING'):
            self.assertEqual(store.refresh(), '6')

    def test_refresh_before_hydration_does_not_touch_storage(self):
        storage = FlakyStorage({MONTH_FILTER_KEY: '2'})
        store = self._store(storage)
        self.assertIsNone(store.refresh())
        self.assertEqual(storage.get_calls, 0)
        self.assertEqual(store.state, FilterState.UNINITIALIZED)

    def test_closed_store_rejects_writes(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        store.close()
        self.assertIsNone(store.current_value())
        with self.assertRaises(FilterNotReadyError):
            store.set_value('3')
        self.assertEqual(storage.get(MONTH_FILTER_KEY), '6')

    def test_options_are_the_twelve_months_in_order(self):
        store = self._store(InMemoryStorage())
        self.assertEqual([o.value for o in store.options], [str(i) for i in range(1, 13)])
        self.assertEqual(store.options[0].label, 'Janvier')
        self.assertEqual(store.options[7].label, 'Août')
        self.assertEqual(store.options[11].label, 'Décembre')

    def test_spanish_labels(self):
        store = FilterStore(month_filter('es'), InMemoryStorage(), clock=june_15)
        self.assertEqual(store.options[0].label, 'Enero')
        self.assertEqual(store.definition.placeholder, 'Filtrar por mes')

    def test_snapshot(self):
        store = self._store(InMemoryStorage())
        store.hydrate()
        snap = store.snapshot()
        self.assertEqual(snap['key'], MONTH_FILTER_KEY)
        self.assertEqual(snap['state'], 'ready')
        self.assertEqual(snap['value'], '6')
        self.assertEqual(snap['placeholder'], 'Filtrer par mois')
        self.assertEqual(snap['options'][5], {'value': '6', 'label': 'Juin'})


class FilterStoreListenerTests(unittest.TestCase):
    def test_listeners_see_hydration_and_changes(self):
        store = FilterStore(month_filter(), InMemoryStorage(), clock=june_15)
        seen = []
        unsubscribe = store.subscribe(lambda key, value: seen.append((key, value)))
        store.hydrate()
        store.set_value('4')
        unsubscribe()
        store.set_value('5')
        self.assertEqual(seen, [(MONTH_FILTER_KEY, '6'), (MONTH_FILTER_KEY, '4')])

    def test_failing_listener_does_not_block_others(self):
        store = FilterStore(month_filter(), InMemoryStorage(), clock=june_15)
        seen = []

        def broken(_key, _value):
            raise RuntimeError('boom')

        store.subscribe(broken)
        store.subscribe(lambda key, value: seen.append(value))
        store.hydrate()
        with self.assertLogs('dashfilters.services.filter_store', level='ERROR'):
            store.set_value('8')
        self.assertEqual(store.current_value(), '8')
        self.assertEqual(seen, ['6', '8'])


class YearFilterStoreTests(unittest.TestCase):
    def _store(self, storage):
        return FilterStore(year_filter('fr', start_year=2023), storage, clock=june_15)

    def test_options_start_with_all_then_years_descending(self):
        store = self._store(InMemoryStorage())
        self.assertEqual([o.value for o in store.options], [ALL_YEARS, '2025', '2024', '2023'])
        self.assertEqual(store.options[0].label, 'Toutes les années')

    def test_default_is_current_year(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        self.assertEqual(store.current_value(), '2025')
        self.assertEqual(storage.get(YEAR_FILTER_KEY), '2025')

    def test_all_years_can_be_selected_and_restored(self):
        storage = InMemoryStorage()
        store = self._store(storage)
        store.hydrate()
        store.set_value(ALL_YEARS)
        again = self._store(storage)
        again.hydrate()
        self.assertEqual(again.current_value(), ALL_YEARS)

    def test_year_outside_range_is_rejected(self):
        store = self._store(InMemoryStorage({YEAR_FILTER_KEY: '2019'}))
        store.hydrate()
        self.assertEqual(store.current_value(), '2025')
        with self.assertRaises(InvalidFilterValueError):
            store.set_value('2026')

    def test_start_year_after_current_year_defaults_to_all(self):
        storage = InMemoryStorage()
        store = FilterStore(year_filter('fr', start_year=2030), storage, clock=june_15)
        self.assertEqual([o.value for o in store.options], [ALL_YEARS])
        with self.assertLogs('dashfilters.services.filter_store', level='WARNING'):
            self.assertEqual(store.hydrate(), ALL_YEARS)
        self.assertEqual(storage.get(YEAR_FILTER_KEY), ALL_YEARS)


if __name__ == '__main__':
    unittest.main()
