"""
Code writer — renders the generated CRUD application from a TableConfig.

Jinja2 templates under ``core/templates`` produce a FastAPI route module per
table, an application shell that mounts every generated route, and the Vue
views/components for the admin frontend.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import settings
from core.config_store import validate_table_name
from models.connection import ConnectionRequest
from models.table_config import TableConfig

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ── Template helpers ──────────────────────────────────────────────────────────

def pascal_case(s: str) -> str:
    parts = re.split(r"[-_\s]+", s)
    return "".join(p[0].upper() + p[1:] for p in parts if p)


def title_case(s: str) -> str:
    return s[:1].upper() + s[1:]


def input_type(sql_type: str) -> str:
    """HTML input type for a SQL column type."""
    t = sql_type.lower()
    if t in ("int", "integer", "bigint", "smallint", "tinyint", "mediumint", "decimal",
             "numeric", "float", "double", "real", "money", "smallmoney"):
        return "number"
    if t in ("datetime", "datetime2", "timestamp", "smalldatetime", "datetimeoffset"):
        return "datetime-local"
    if t == "date":
        return "date"
    return "text"


def create_jinja_env(templates_dir: Path) -> Environment:
    """Create Jinja2 environment with custom filters."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["pascal_case"] = pascal_case
    env.filters["title_case"] = title_case
    env.filters["input_type"] = input_type
    env.filters["pyrepr"] = repr
    env.filters["to_json"] = lambda x: json.dumps(x, indent=2)
    return env


# ── Generated file tracking ───────────────────────────────────────────────────

@dataclass
class GeneratedFile:
    path: str           # Relative to the output directory
    template: Optional[str] = None


@dataclass
class GenerationResult:
    table: str
    files: list[GeneratedFile] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


# ── Writer ────────────────────────────────────────────────────────────────────

class CodeWriter:
    """Generates backend and frontend artifacts for one table configuration."""

    def __init__(self, config: TableConfig, output_dir: Optional[Path] = None,
                 templates_dir: Optional[Path] = None):
        self.config = config
        self.table = validate_table_name(config.table)
        self.output_dir = Path(output_dir or settings.GENERATED_DIR)
        self.env = create_jinja_env(templates_dir or TEMPLATES_DIR)

    @property
    def backend_dir(self) -> Path:
        return self.output_dir / "backend"

    def generate_all(self) -> GenerationResult:
        result = GenerationResult(table=self.table)
        context = self._create_context()
        table = self.table

        self._save_config(result)
        self._render("backend/route.py.j2", f"backend/routes/{table}.py", context, result)
        self._render("backend/main.py.j2", "backend/main.py", context, result)
        self._render("frontend/List.vue.j2", f"frontend/src/views/{table}/List.vue", context, result)
        self._render("frontend/Create.vue.j2", f"frontend/src/views/{table}/Create.vue", context, result)
        self._render("frontend/Edit.vue.j2", f"frontend/src/views/{table}/Edit.vue", context, result)
        self._render("frontend/FormEditor.vue.j2", f"frontend/src/components/{table}/FormEditor.vue", context, result)
        self._render("frontend/main.js.j2", "frontend/src/main.js", context, result)
        self._render_navigation(result)

        logger.info("Generated %d files for table %s", len(result.files), table)
        return result

    def _create_context(self) -> dict[str, Any]:
        cfg = self.config
        fields = cfg.fields
        return {
            "table": self.table,
            "dialect": cfg.db_config.type,
            "database_url": _database_url(cfg),
            "primary_key": cfg.primary_key,
            "fields": fields,
            "auth": cfg.auth.model_dump(by_alias=True, exclude_none=True),
            "columns": cfg.field_names("show_in_table"),
            "filterable": cfg.field_names("filterable"),
            "editable": cfg.field_names("editable"),
            "creatable": cfg.field_names("creatable"),
            "visible": cfg.field_names("visible"),
            "api_url": f"{settings.GENERATED_API_URL.rstrip('/')}/{self.table}",
        }

    def _render(self, template_path: str, relative_path: str, context: dict[str, Any],
                result: GenerationResult) -> None:
        content = self.env.get_template(template_path).render(**context)
        self._write_file(relative_path, content, result, template_path)

    def _write_file(self, relative_path: str, content: str, result: GenerationResult,
                    template: Optional[str] = None) -> None:
        full_path = self.output_dir / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        result.files.append(GeneratedFile(path=relative_path, template=template))

    def _save_config(self, result: GenerationResult) -> None:
        content = json.dumps(self.config.to_json(), indent=2)
        self._write_file(f"backend/config/{self.table}.json", content, result)

    def _render_navigation(self, result: GenerationResult) -> None:
        """Router and navigation list every table generated so far, not just this one."""
        config_dir = self.backend_dir / "config"
        tables = sorted(p.stem for p in config_dir.glob("*.json"))
        self._render("frontend/router.js.j2", "frontend/src/router.js", {"tables": tables}, result)
        self._render("frontend/App.vue.j2", "frontend/src/App.vue", {"tables": tables}, result)


def _database_url(cfg: TableConfig) -> str:
    db = cfg.db_config
    req = ConnectionRequest(
        type=db.type, host=db.host, port=db.port,
        user=db.user, password=db.password, database=db.database,
    )
    return req.get_sqlalchemy_url()
