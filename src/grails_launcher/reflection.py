"""Dynamic invocation of operations on objects whose type is only known at runtime.

Two call styles are provided. ``invoke_method`` lets every failure reach the
caller as-is. ``invoke_method_wrap_exception`` turns every failure into a
single ``InvocationError`` so callers never have to tell a missing operation
from a bad argument or from an error raised by the target itself.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple, Type, Union

from grails_launcher.exceptions import InvocationError

logger = logging.getLogger(__name__)

ParamType = Union[Type[Any], Tuple[Type[Any], ...]]


def _describe(param_type: ParamType) -> str:
    if isinstance(param_type, tuple):
        return " | ".join(t.__name__ for t in param_type)
    return param_type.__name__


def check_arguments(
    operation: str,
    param_types: Optional[Sequence[ParamType]],
    args: Sequence[Any],
) -> None:
    """Check ``args`` against the declared parameter types.

    ``None`` is accepted for any parameter. Without ``param_types`` no check
    is made.

    Raises:
        TypeError: On an arity or type mismatch
    """
    if param_types is None:
        return

    if len(param_types) != len(args):
        raise TypeError(
            f"{operation} expects {len(param_types)} argument(s), got {len(args)}"
        )

    for position, (param_type, arg) in enumerate(zip(param_types, args)):
        if arg is not None and not isinstance(arg, param_type):
            raise TypeError(
                f"{operation} argument {position} must be {_describe(param_type)}, "
                f"got {type(arg).__name__}"
            )


def invoke_method(
    target: Any,
    name: str,
    param_types: Optional[Sequence[ParamType]] = None,
    args: Optional[Sequence[Any]] = None,
) -> Any:
    """Call operation ``name`` on ``target`` and return its result.

    ``target`` may be an instance or a class (for class-level operations).

    Args:
        target: Object or class to call on
        name: Operation name
        param_types: Declared parameter types, one per argument
        args: Positional arguments

    Returns:
        Whatever the operation returns

    Raises:
        AttributeError: If the target has no such operation
        TypeError: If the arguments do not match ``param_types``
        Exception: Anything raised by the operation itself
    """
    args = tuple(args or ())
    check_arguments(name, param_types, args)

    operation = getattr(target, name)
    if not callable(operation):
        raise TypeError(f"{name} on {type(target).__name__} is not callable")

    logger.debug("Invoking %s.%s with %d argument(s)", _target_name(target), name, len(args))
    return operation(*args)


def invoke_method_wrap_exception(
    target: Any,
    name: str,
    param_types: Optional[Sequence[ParamType]] = None,
    args: Optional[Sequence[Any]] = None,
) -> Any:
    """Same as :func:`invoke_method` but every failure becomes ``InvocationError``."""
    try:
        return invoke_method(target, name, param_types, args)
    except Exception as e:
        raise InvocationError(target, name, e) from e


def new_instance(
    cls: type,
    param_types: Optional[Sequence[ParamType]] = None,
    args: Optional[Sequence[Any]] = None,
) -> Any:
    """Construct ``cls`` with positional ``args`` after checking their types."""
    args = tuple(args or ())
    check_arguments(f"{cls.__name__}()", param_types, args)
    logger.debug("Instantiating %s with %d argument(s)", cls.__name__, len(args))
    return cls(*args)


def _target_name(target: Any) -> str:
    return target.__name__ if isinstance(target, type) else type(target).__name__


__all__ = [
    "ParamType",
    "check_arguments",
    "invoke_method",
    "invoke_method_wrap_exception",
    "new_instance",
]
