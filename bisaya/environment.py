from typing import Any, Dict, Optional
from bisaya.errors import BisayaError
from bisaya.types import ErrorVal, TypeSpec, NoneVal, check_value


class Environment:
    """The single flat scope mapping declared names to typed values.

    Blocks (PUNDOK bodies of KUNG and ALANG SA) do not open a new scope;
    they read and write this same table, so loop bodies see and update the
    variables tested by the loop condition.
    """
    def __init__(self):
        self.values: Dict[str, Any] = {}
        self.types: Dict[str, TypeSpec] = {}

    def type_of(self, name: str) -> TypeSpec:
        if name not in self.types:
            raise BisayaError(ErrorVal('ReferenceError', f'undeclared variable {name}'))
        return self.types[name]

    def get(self, name: str) -> Any:
        if name not in self.types:
            raise BisayaError(ErrorVal('ReferenceError', f'undeclared variable {name}'))
        return self.values[name]

    def assign(self, name: str, value: Any):
        if name not in self.types:
            raise BisayaError(ErrorVal('ReferenceError', f'variable {name} is not declared'))
        try:
            check_value(value, self.types[name])
        except TypeError as e:
            raise BisayaError(ErrorVal('TypeError', f'cannot assign to {name}: {e}'))
        self.values[name] = value

    def declare(self, name: str, type_spec: TypeSpec, value: Optional[Any] = None):
        if name in self.types:
            raise BisayaError(ErrorVal('DeclarationError', f'variable {name} already declared'))
        if value is not None:
            try:
                check_value(value, type_spec)
            except TypeError as e:
                raise BisayaError(ErrorVal('DeclarationError', f'cannot initialize {name}: {e}'))
        else:
            # every type starts unset until assigned
            value = NoneVal()
        self.values[name] = value
        self.types[name] = type_spec
