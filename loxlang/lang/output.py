"""Results of evaluating a node with the Interpreter.

```
Output ::= Value(obj)      ; normal result of an expression
         | Returned(obj)   ; a `return` unwinding towards the nearest call boundary
         | NO_VALUE        ; statements without a result; the interpreter's neutral Output
```
"""

from dataclasses import dataclass

from loxlang.syntax.nodes import Object


class Output:
    """Superclass of interpreter results."""


@dataclass(frozen=True)
class Value(Output):
    obj: Object


@dataclass(frozen=True)
class Returned(Output):
    obj: Object


class NoValue(Output):

    def __repr__(self):
        return "NO_VALUE"


NO_VALUE = NoValue()
