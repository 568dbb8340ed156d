"""Resolution of ``module:QualifiedName`` class references given on the CLI."""

import importlib
from typing import Any

import click


class ClassReference(click.ParamType):
    """Click parameter type that imports a class from ``module:Qual.Name``."""

    name = "module:Class"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> type:
        if isinstance(value, type):
            return value
        module_name, sep, qualname = str(value).partition(":")
        if not sep or not module_name or not qualname:
            self.fail(f"{value!r} is not of the form module:ClassName", param, ctx)
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError as exc:
            self.fail(f"cannot import module {module_name!r}: {exc}", param, ctx)
        for part in qualname.split("."):
            try:
                obj = getattr(obj, part)
            except AttributeError:
                self.fail(f"{module_name!r} has no attribute {qualname!r}", param, ctx)
        if not isinstance(obj, type):
            self.fail(f"{value!r} is not a class", param, ctx)
        return obj
