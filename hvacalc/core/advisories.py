"""Advisory messages that the calculators attach to their results.

An advisory is purely informational: it never stops a calculation. Each
calculator defines its own enumeration of advisory codes, whose values are the
message templates. An `Advisory` keeps the code together with the parameters
used to format the message, so that results can be checked on the code
without parsing text, and messages can be rendered in another language from
the same parameters.
"""
from typing import Any
from dataclasses import dataclass
from enum import Enum


class AdvisoryCode(Enum):
    """Base class of advisory code enumerations. The value of a member is the
    English message template, formatted with `str.format` syntax.
    """

    def __call__(self, **params: Any) -> 'Advisory':
        return Advisory(code=self, params=tuple(params.items()))

    @property
    def template(self) -> str:
        return self.value


@dataclass(frozen=True)
class Advisory:
    """An advisory code with the (name, value) pairs that format its
    message. Advisories are immutable and hashable, as are the results that
    hold them.
    """
    code: AdvisoryCode
    params: tuple[tuple[str, Any], ...] = ()

    @property
    def message(self) -> str:
        return self.code.template.format(**dict(self.params))

    def __str__(self) -> str:
        return self.message


def codes(advisories: tuple[Advisory, ...]) -> list[AdvisoryCode]:
    """Returns the codes of `advisories`, in the same order."""
    return [advisory.code for advisory in advisories]
