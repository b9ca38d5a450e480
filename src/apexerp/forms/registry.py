"""Module and form definitions plus the process-wide module registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .schema import FormSchema


@dataclass(frozen=True, slots=True)
class DisplayField:
    """A read-only value shown on a form (auto numbers, placeholder figures)."""

    label: str
    value: str


@dataclass(frozen=True, slots=True)
class SampleTable:
    """A static table rendered below a form."""

    title: str
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True, slots=True)
class FormDefinition:
    """One tab of a module page."""

    slug: str
    tab_label: str
    title: str
    schema: type[FormSchema]
    submit_label: str
    success_title: str
    description: str = ""
    success_description: str = ""
    reset_on_submit: bool = True
    display_fields: tuple[DisplayField, ...] = ()
    # (field name, app config key) pairs whose default comes from configuration
    config_defaults: tuple[tuple[str, str], ...] = ()
    tables: tuple[SampleTable, ...] = ()

    @property
    def success_message(self) -> str:
        if self.success_description:
            return f"{self.success_title}. {self.success_description}"
        return self.success_title

    def defaults_from(self, config: dict) -> dict[str, object]:
        """Resolve ``config_defaults`` against an application config mapping."""

        return {name: config[key] for name, key in self.config_defaults if key in config}


@dataclass(frozen=True, slots=True)
class ModuleDefinition:
    """An ERP area rendered as a tabbed page."""

    slug: str
    title: str
    nav_label: str
    icon: str
    forms: tuple[FormDefinition, ...]
    description: str = ""
    _index: dict[str, FormDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.forms:
            raise ValueError(f"Module {self.slug!r} declares no forms")
        index: dict[str, FormDefinition] = {}
        for definition in self.forms:
            if definition.slug in index:
                raise ValueError(
                    f"Duplicate form slug {definition.slug!r} in module {self.slug!r}"
                )
            index[definition.slug] = definition
        object.__setattr__(self, "_index", index)

    @property
    def default_form(self) -> FormDefinition:
        return self.forms[0]

    def form(self, slug: str) -> FormDefinition:
        """Return the form registered under ``slug``; ``KeyError`` if unknown."""

        try:
            return self._index[slug]
        except KeyError:
            raise KeyError(f"Module {self.slug!r} has no form {slug!r}") from None


_MODULES: dict[str, ModuleDefinition] = {}


def register_module(module: ModuleDefinition) -> ModuleDefinition:
    """Add ``module`` to the registry; re-registering the same object is a no-op."""

    existing = _MODULES.get(module.slug)
    if existing is not None and existing is not module:
        raise ValueError(f"Module slug {module.slug!r} is already registered")
    _MODULES[module.slug] = module
    return module


def get_module(slug: str) -> ModuleDefinition:
    try:
        return _MODULES[slug]
    except KeyError:
        raise KeyError(f"Unknown module {slug!r}") from None


def get_form(module_slug: str, form_slug: str) -> FormDefinition:
    return get_module(module_slug).form(form_slug)


def iter_modules() -> Iterator[ModuleDefinition]:
    """Yield registered modules in registration order."""

    yield from _MODULES.values()


__all__ = [
    "DisplayField",
    "FormDefinition",
    "ModuleDefinition",
    "SampleTable",
    "get_form",
    "get_module",
    "iter_modules",
    "register_module",
]
