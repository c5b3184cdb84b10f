"""
Persistence for the donor registry.

Two named records live in a key-value store: ``donors`` (a JSON array of
donor objects) and ``targets`` (a JSON object mapping blood group to a target
count). Stores only deal in text; the repository does the (de)serialization
and recovers from anything it can't parse.
"""
import json
import logging
import os
import tempfile
import threading

from .validators import coerce_target

logger = logging.getLogger(__name__)

# ============== BLOOD GROUPS ==============

# Canonical order: tie-breaks for the most-needed group and the target editor
BLOOD_GROUPS = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']

# Availability cards are listed in this order
DISPLAY_ORDER = ['O+', 'O-', 'A+', 'A-', 'B+', 'B-', 'AB+', 'AB-']

DEFAULT_TARGETS = {
    'A+': 20, 'A-': 8,
    'B+': 20, 'B-': 6,
    'AB+': 6, 'AB-': 3,
    'O+': 30, 'O-': 10
}

DONORS_KEY = 'donors'
TARGETS_KEY = 'targets'


# ============== KEY-VALUE STORES ==============

class MemoryStore:
    """Keeps records in a dict, nothing survives the process"""

    def __init__(self, items=None):
        self._items = dict(items or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, text):
        self._items[key] = text


class JsonFileStore:
    """
    One file per key under ``data_dir`` (``donors`` -> ``donors.json``).

    Writes go to a temporary file in the same directory which is then renamed
    over the destination, so a reader sees either the old or the new document.
    """

    def __init__(self, data_dir):
        self.data_dir = data_dir
        os.makedirs(data_dir, exist_ok=True)

    def path_for(self, key):
        return os.path.join(self.data_dir, f'{key}.json')

    def get_item(self, key):
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set_item(self, key, text):
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f'.{key}-', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(tmp_path, self.path_for(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


# ============== REPOSITORY ==============

def is_donor_record(record):
    """Donor entries are objects with a string blood group"""
    return isinstance(record, dict) and isinstance(record.get('blood_group'), str)


class DonorRepository:
    """Load/save pairs for the donor list and the target table"""

    def __init__(self, store):
        self.store = store
        # Held by callers around read-modify-write sequences
        self.lock = threading.RLock()

    def _load(self, key):
        try:
            text = self.store.get_item(key)
            if text is None:
                return None
            return json.loads(text)
        except ValueError as e:
            logger.warning("Ignoring malformed %r record: %s", key, e)
            return None

    def load_donors(self):
        """Return the stored donor list, or an empty list if missing or unreadable"""
        donors = self._load(DONORS_KEY)
        if donors is None:
            return []
        if not isinstance(donors, list):
            logger.warning("Ignoring %r record: expected a JSON array, got %s",
                           DONORS_KEY, type(donors).__name__)
            return []
        records = [d for d in donors if is_donor_record(d)]
        if len(records) != len(donors):
            logger.warning("Skipping %d %r entries that are not donor objects",
                           len(donors) - len(records), DONORS_KEY)
        return records

    def save_donors(self, donors):
        self.store.set_item(DONORS_KEY, json.dumps(list(donors), ensure_ascii=False))

    def load_targets(self):
        """Return the stored target table, falling back to the defaults"""
        targets = self._load(TARGETS_KEY)
        if targets is None:
            return dict(DEFAULT_TARGETS)
        if not isinstance(targets, dict):
            logger.warning("Ignoring %r record: expected a JSON object, got %s",
                           TARGETS_KEY, type(targets).__name__)
            return dict(DEFAULT_TARGETS)
        targets = {group: coerce_target(value) for group, value in targets.items()}
        for group in BLOOD_GROUPS:
            targets.setdefault(group, DEFAULT_TARGETS[group])
        return targets

    def save_targets(self, targets):
        self.store.set_item(TARGETS_KEY, json.dumps(dict(targets), ensure_ascii=False))
