import json, logging, typing as t
from pathlib import Path

import yaml

from .. import config
from .descriptor import FilterSchema

log = logging.getLogger("qsfilter.registry")


class RegistryEntry(t.TypedDict):
    schema: FilterSchema
    view: str
    maxLimit: int


class SchemaRegistry:
    """
    Named filter schemas loaded from a YAML or JSON file:

        entities:
          users:
            table: users
            maxLimit: 200
            fields:
              - {name: name, kind: string}
              - {name: age, kind: number, valueType: int}
    """

    def __init__(self, path: t.Optional[Path] = None, entries: t.Optional[dict[str, RegistryEntry]] = None):
        self.path = Path(path) if path is not None else config.SCHEMAS_PATH
        self.entities: dict[str, RegistryEntry] = dict(entries or {})

    @classmethod
    def from_schemas(cls, schemas: dict[str, FilterSchema], *, max_limit: int | None = None) -> "SchemaRegistry":
        cap = config.GLOBAL_MAX_LIMIT if max_limit is None else max_limit
        entries: dict[str, RegistryEntry] = {
            name: {"schema": s, "view": s.table or name, "maxLimit": cap}
            for name, s in schemas.items()
        }
        return cls(entries=entries)

    def load(self) -> None:
        if not self.path.exists():
            raise RuntimeError(f"Schema file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            if self.path.suffix.lower() in (".yaml", ".yml"):
                cfg = yaml.safe_load(f) or {}
            else:
                cfg = json.load(f)
        self.entities = self._normalize(cfg.get("entities", {}))
        log.info("loaded %d filter schemas from %s", len(self.entities), self.path)

    def reload(self) -> dict[str, str]:
        """Re-read the schema file; returns a per-entity summary."""
        self.load()
        return {
            name: f"ok ({len(entry['schema'].fields)} fields)"
            for name, entry in self.entities.items()
        }

    def ensure_entity(self, name: str) -> RegistryEntry:
        if name not in self.entities:
            raise KeyError(f"Unknown entity: {name}")
        return self.entities[name]

    def _normalize(self, ents: dict) -> dict[str, RegistryEntry]:
        norm: dict[str, RegistryEntry] = {}
        for k, v in ents.items():
            if not isinstance(v, dict) or "fields" not in v:
                raise RuntimeError(f"Bad entity schema for {k}: {v}")
            schema = FilterSchema.from_dict(v, name=k)
            norm[k] = {
                "schema": schema,
                "view": v.get("view") or schema.table or k,
                "maxLimit": int(v.get("maxLimit", config.GLOBAL_MAX_LIMIT)),
            }
        return norm
