# backend/coachbook/models/_constraints.py
"""Helpers turning the shared constraint table into SQL CHECK constraints."""

from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint

from ..core.enums import enum_values


def between(column: str, low: float, high: float, name: str) -> CheckConstraint:
    return CheckConstraint(f'"{column}" >= {low} AND "{column}" <= {high}', name=name)


def at_least(column: str, low: float, name: str, *, nullable: bool = False) -> CheckConstraint:
    clause = f'"{column}" >= {low}'
    if nullable:
        clause = f'("{column}" IS NULL) OR ({clause})'
    return CheckConstraint(clause, name=name)


def length_between(
    column: str,
    low: Optional[int],
    high: int,
    name: str,
    *,
    nullable: bool = False,
) -> CheckConstraint:
    clause = f'length("{column}") <= {high}'
    if low is not None:
        clause = f'length("{column}") >= {low} AND {clause}'
    if nullable:
        clause = f'("{column}" IS NULL) OR ({clause})'
    return CheckConstraint(clause, name=name)


def one_of(column: str, enum_class: type[Enum], name: str) -> CheckConstraint:
    values = ", ".join(f"'{value}'" for value in enum_values(enum_class))
    return CheckConstraint(f'"{column}" IN ({values})', name=name)
