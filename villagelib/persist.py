'''Conversion of villagelib records and validators to JSON-ready dicts.

Only plain structure is handled: atomic values, lists, string-keyed dicts and
objects of classes decorated with :func:`simple_serialization`. The output
can be passed to :func:`json.dumps` directly and read back with
:func:`from_dict`.
'''

import inspect
import importlib
from typing import Any, List, Dict


PACKAGE_NAME = 'villagelib'

ATOMIC_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names, so the class must store its
    constructor arguments under the same attribute names (in any form its
    constructor accepts back).

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = list(class_.serialize_params)
    else:
        param_names = [
            name for name in inspect.signature(class_.__init__).parameters
            if name != 'self'
        ]

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, dict):
        if not all(isinstance(key, str) for key in value.keys()):
            raise ValueError(f'cannot serialize non-string keys of {value!r}')
        return {key: serialize_value(val) for key, val in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'class' in value and is_scoped_identifier(value['class']):
            return deserialize_class(value)
        else:
            return {key: deserialize_value(val) for key, val in value.items()}
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, list):
        return [deserialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_class(clsdef['class'])
    params = {
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != 'class'
    }
    try:
        return cls(**params)
    except TypeError as e:
        raise ValueError(f'invalid parameters for {clsdef["class"]}') from e


def get_class(identifier: str) -> type:
    '''Resolve a scoped class name, accepting only villagelib classes.'''
    if '.' not in identifier:
        raise ValueError(f'unscoped class name: {identifier}')
    module, name = identifier.rsplit('.', 1)
    if module.split('.', 1)[0] != PACKAGE_NAME:
        raise ValueError(f'not a {PACKAGE_NAME} class: {identifier}')
    try:
        cls = getattr(importlib.import_module(module), name)
    except (ImportError, AttributeError) as e:
        raise ValueError(f'unknown class: {identifier}') from e
    if not hasattr(cls, 'to_dict'):
        raise ValueError(f'class {identifier} is not serializable')
    return cls


def from_dict(value: Dict[str, Any]) -> Any:
    '''Reconstruct a villagelib object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not define a known
        serializable villagelib class or its parameters do not fit.
    '''
    if not isinstance(value, dict):
        raise ValueError('invalid villagelib object def: dict expected,'
                         f' got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid villagelib object def: must have a class key')
    elif not is_scoped_identifier(value['class']):
        inval_cls = value['class']
        raise ValueError(f'invalid villagelib class def: {inval_cls}')
    else:
        return deserialize_class(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    '''Serialize a villagelib object to a JSON-ready dictionary.

    :param obj: An object providing a `to_dict()` method, such as festival
        records or voter validators.
    '''
    return serialize_value(obj)


def to_dicts(objs: List[Any]) -> List[Dict[str, Any]]:
    return [to_dict(obj) for obj in objs]


def is_scoped_identifier(value: Any) -> bool:
    return (
        isinstance(value, str)
        and not value.startswith('.')
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))
