"""
label_mapper.py - Gesture label ids <-> names

The label file is a CSV with an `id,name` header:

    id,name
    0,hello
    1,thanks
"""

import logging
import os

import pandas as pd

import config

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "unknown"


class LabelMapper:
    def __init__(self, labels=None):
        self.itos = {}
        self.stoi = {}
        for label_id, name in (labels or {}).items():
            self.add(label_id, name)

    def add(self, label_id, name):
        self.itos[int(label_id)] = str(name)
        self.stoi[str(name)] = int(label_id)

    @classmethod
    def load(cls, path=None):
        path = path or os.path.join(config.PATH_DATA_FOLDER, config.FILE_LABEL)
        mapper = cls()
        if not os.path.isfile(path):
            logger.warning(f"No label file at {path}, labels will be shown as ids")
            return mapper
        df = pd.read_csv(path, dtype={"id": int, "name": str},
                         skipinitialspace=True, keep_default_na=False)
        for label_id, name in zip(df["id"], df["name"]):
            mapper.add(label_id, str(name).strip())
        logger.info(f"Loaded {len(mapper)} labels from {path}")
        return mapper

    def save(self, path):
        df = pd.DataFrame(sorted(self.itos.items()), columns=["id", "name"])
        df.to_csv(path, index=False)

    def __len__(self):
        return len(self.itos)

    def ids(self):
        return sorted(self.itos)

    def name(self, label_id):
        return self.itos.get(label_id, UNKNOWN_LABEL)

    def id(self, name):
        if name not in self.stoi:
            raise KeyError(f"unknown label name: {name!r}")
        return self.stoi[name]

    def next_id(self, label_id, step=1):
        """Neighbouring label id, wrapping around"""
        ids = self.ids()
        if not ids:
            return label_id
        if label_id not in ids:
            return ids[0]
        return ids[(ids.index(label_id) + step) % len(ids)]
