"""Compile document-style where clauses and sort strings into SQLAlchemy."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import and_, asc, desc, false, or_, true

from brigade_site.exceptions import InvalidQueryError
from brigade_site.i18n.locale import DEFAULT_LOCALE, SUPPORTED_LOCALES
from brigade_site.store.base import Where
from brigade_site.store.collections import CollectionSpec

OPERATORS = frozenset({"equals", "not_equals", "less_than", "greater_than", "exists", "in"})


def compile_where(spec: CollectionSpec, where: Where | None, locale: str | None):
    """Turn a where dict into a single SQL boolean expression."""
    if not where:
        return true()

    clauses = []
    for key, condition in where.items():
        if key in ("and", "or"):
            if not isinstance(condition, (list, tuple)):
                raise InvalidQueryError(f"'{key}' expects a list of conditions", field=key)
            parts = [compile_where(spec, sub, locale) for sub in condition]
            if key == "and":
                clauses.append(and_(true(), *parts))
            else:
                # An empty OR matches nothing
                clauses.append(or_(*parts) if parts else false())
        else:
            clauses.append(_compile_field(spec, key, condition, locale))
    return and_(*clauses) if len(clauses) > 1 else clauses[0]


def _column(spec: CollectionSpec, path: str, locale: str | None):
    """Resolve ``"slug"`` or ``"slug.en"`` to a column expression."""
    key, _, pinned = path.partition(".")
    attribute = getattr(spec.model, spec.attribute(key))
    if key in spec.localized:
        field_locale = pinned or locale or DEFAULT_LOCALE
        if field_locale not in SUPPORTED_LOCALES:
            raise InvalidQueryError(f"Unsupported locale '{field_locale}' in '{path}'", field=path)
        return key, attribute[field_locale].as_string()
    if pinned:
        raise InvalidQueryError(f"Field '{key}' is not localized", field=path)
    return key, attribute


def _coerce(spec: CollectionSpec, key: str, value: Any) -> Any:
    if key in spec.relations or key == "id":
        if isinstance(value, dict):
            value = value.get("id")
        if isinstance(value, str) and value.isdigit():
            value = int(value)
        return value
    if key in spec.date_fields and isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise InvalidQueryError(f"Invalid date '{value}'", field=key) from None
    return value


def _compile_field(spec: CollectionSpec, path: str, condition: Any, locale: str | None):
    if not isinstance(condition, dict) or not condition:
        raise InvalidQueryError(f"Condition for '{path}' must be an operator mapping", field=path)

    key, column = _column(spec, path, locale)
    localized = key in spec.localized
    clauses = []
    for operator, raw in condition.items():
        if operator not in OPERATORS:
            raise InvalidQueryError(f"Unknown operator '{operator}'", field=path)

        if operator == "exists":
            present = column.isnot(None)
            if localized:
                present = and_(present, column != "")
            clauses.append(present if raw else ~present)
            continue

        if operator == "in":
            values = [_coerce(spec, key, v) for v in (raw or [])]
            clauses.append(column.in_(values) if values else false())
            continue

        value = _coerce(spec, key, raw)
        if operator == "equals":
            clauses.append(column.is_(None) if value is None else column == value)
        elif operator == "not_equals":
            clauses.append(column.isnot(None) if value is None else column != value)
        elif operator == "less_than":
            clauses.append(column < value)
        else:
            clauses.append(column > value)

    return and_(*clauses) if len(clauses) > 1 else clauses[0]


def compile_sort(spec: CollectionSpec, sort: str | None, locale: str | None) -> list:
    """``"-publishedDate"`` -> ORDER BY published_date DESC, id DESC."""
    if not sort:
        return [asc(spec.model.id)]
    descending = sort.startswith("-")
    _, column = _column(spec, sort.lstrip("-"), locale)
    direction = desc if descending else asc
    return [direction(column), direction(spec.model.id)]
