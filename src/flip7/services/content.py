from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from flip7.engine.types import ACTION_TYPES, ActionType, DeckComposition


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_list(obj: Mapping[str, object], key: str) -> list[object]:
    v = obj.get(key)
    if not isinstance(v, list):
        raise ContentError(f"Expected list for {key}")
    return v


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_deck_composition(self) -> DeckComposition:
        path = self._data_dir / "deck.json"
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / "deck.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("deck.json must be an object")

        numbers: dict[int, int] = {}
        for item in _require_list(raw, "numbers"):
            if isinstance(item, dict):
                value = _require_int(item, "value")
                numbers[value] = numbers.get(value, 0) + _require_int(item, "count")

        doubles = 0
        plus_bonuses: dict[int, int] = {}
        for item in _require_list(raw, "modifiers"):
            if not isinstance(item, dict):
                continue
            count = _require_int(item, "count")
            if item.get("type") == "x2":
                doubles += count
            else:
                bonus = _require_int(item, "bonus")
                plus_bonuses[bonus] = plus_bonuses.get(bonus, 0) + count

        actions: dict[ActionType, int] = {}
        for item in _require_list(raw, "actions"):
            if not isinstance(item, dict):
                continue
            kind = item.get("type")
            # trust schema for allowed values
            if kind in ACTION_TYPES:
                actions[kind] = actions.get(kind, 0) + _require_int(item, "count")  # type: ignore[index]

        return DeckComposition(
            numbers=dict(sorted(numbers.items())),
            doubles=doubles,
            plus_bonuses=dict(sorted(plus_bonuses.items())),
            actions=actions,
        )

    def validate_event_log(self, path: Path) -> int:
        """Check every record of a JSONL event log; returns the record count."""
        schema = _load_schema(self._schema_dir / "events.schema.json")
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError as e:
            raise ContentError(f"Missing event log: {path}") from e
        except UnicodeDecodeError as e:
            raise ContentError(f"Event log is not UTF-8: {path}") from e

        count = 0
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError as e:
                raise ContentError(f"Invalid JSON in {path}:{lineno}: {e}") from e
            validate_json(rec, schema, context=f"{path}:{lineno}")
            count += 1
        return count

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_deck_composition()
        _ = _load_schema(self._schema_dir / "events.schema.json")
