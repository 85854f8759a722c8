"""
BSD 3-Clause License

Copyright (c) 2025, Vincent

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Self, Sequence, TypeAlias

logger = logging.getLogger(__name__)

Handler: TypeAlias = Callable[[], None]


class StateVectorError(Exception): ...


class NullArgumentError(StateVectorError, TypeError): ...


class InvalidArgumentError(StateVectorError, ValueError): ...


class StateSet:
    """Ordered group of state labels meaning "any of these states"."""

    __slots__ = ("_labels",)

    def __init__(self, *labels: str) -> None:
        self._labels: tuple[str, ...] = labels

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateSet):
            return NotImplemented
        return self._labels == other._labels

    def __hash__(self) -> int:
        return hash(self._labels)

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._labels!r}"


def any_of(*labels: str) -> StateSet:
    return StateSet(*labels)


StateInput: TypeAlias = str | StateSet | Sequence[str]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


@dataclass(frozen=True)
class Transition:
    from_state: str
    to_state: str
    tag: str
    handler: Handler
    group_index: int = -1
    priority: int = -1

    @property
    def handler_name(self) -> str:
        return _handler_name(self.handler)

    def matches(self, current: str, next_state: str, regex: bool = False) -> bool:
        if regex:
            return (
                re.search(self.from_state, current) is not None
                and re.search(self.to_state, next_state) is not None
            )
        return self.from_state == current and self.to_state == next_state


def _as_labels(states: StateInput, argument: str) -> tuple[str, ...]:
    if states is None:
        raise NullArgumentError(f"Argument `{argument}` must not be None")

    if isinstance(states, str):
        labels: tuple = (states,)
    elif isinstance(states, (StateSet, list, tuple)):
        labels = tuple(states)
    else:
        raise InvalidArgumentError(
            f"Argument `{argument}` must be a string or a {StateSet.__name__}, "
            f"got {type(states).__qualname__}"
        )

    for label in labels:
        if label is None:
            raise NullArgumentError(f"Argument `{argument}` contains None")
        if not isinstance(label, str):
            raise InvalidArgumentError(
                f"Argument `{argument}` contains a non-string label: {label!r}"
            )
        if not label:
            raise InvalidArgumentError(f'Argument `{argument}` contains ""')
    return labels


def _check_handlers(handlers: Sequence[Handler]) -> None:
    for position, func in enumerate(handlers):
        if func is None:
            raise NullArgumentError(f"Handler #{position} must not be None")
        if not callable(func):
            raise InvalidArgumentError(
                f"Handler #{position} is not callable: {func!r}"
            )


class TransitionGroup:
    """Cross product of from-states, to-states and handlers sharing one tag.

    Every call expands ``from x to x handlers`` in the order given, from-states
    outermost and handlers innermost. Arguments are checked before anything is
    appended, so a rejected declaration leaves the group as it was.
    """

    any_of = staticmethod(any_of)

    def __init__(
        self,
        from_states: StateInput,
        to_states: StateInput,
        *handlers: Handler,
        tag: str = "",
    ) -> None:
        self._transitions: list[Transition] = []
        self.add(from_states, to_states, *handlers, tag=tag)

    def add(
        self,
        from_states: StateInput,
        to_states: StateInput,
        *handlers: Handler,
        tag: str = "",
    ) -> Self:
        heads = _as_labels(from_states, "from_states")
        tails = _as_labels(to_states, "to_states")
        if tag is None:
            raise NullArgumentError("Argument `tag` must not be None")
        if not isinstance(tag, str):
            raise InvalidArgumentError(f"Argument `tag` must be a string, got {tag!r}")
        _check_handlers(handlers)

        self._transitions.extend(
            Transition(head, tail, tag, func)
            for head in heads
            for tail in tails
            for func in handlers
        )
        return self

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} with {len(self)} transition(s)>"


def _check_state(state: str, argument: str, allow_empty: bool = False) -> str:
    if state is None:
        raise NullArgumentError(f"Argument `{argument}` must not be None")
    if not isinstance(state, str):
        raise InvalidArgumentError(
            f"Argument `{argument}` must be a string, got {type(state).__qualname__}"
        )
    if not allow_empty and not state:
        raise InvalidArgumentError(f"Argument `{argument}` must not be empty")
    return state


class StateVector:
    """Function table driven by (current state, next state) pairs.

    The transition list is fixed at construction: groups are flattened in the
    given order, each record numbered with the index of its group and with its
    global position (its priority). :meth:`refresh` runs every record matching
    the pair in priority order, then commits the new state, whether or not
    anything matched.

    Meant for low-frequency, UI-paced state changes. Instances are not
    thread-safe: concurrent ``refresh`` calls must be serialized by the caller.
    Reading :attr:`transitions` or calling :meth:`list_info` is always safe.
    """

    def __init__(
        self,
        start_state: str,
        groups: Iterable[TransitionGroup] | TransitionGroup = (),
        *,
        name: str = "",
        regex: bool = False,
        trace: bool = False,
    ) -> None:
        self._current_state = _check_state(start_state, "start_state")
        self._previous_state: Optional[str] = None
        self.name = name
        self.regex_enabled = regex
        self.trace_enabled = trace

        if isinstance(groups, TransitionGroup):
            groups = (groups,)

        transitions: list[Transition] = []
        for group_index, group in enumerate(groups):
            if not isinstance(group, TransitionGroup):
                raise InvalidArgumentError(
                    f"Group #{group_index} is not a {TransitionGroup.__name__}: {group!r}"
                )
            for transition in group:
                transitions.append(
                    dataclasses.replace(
                        transition, group_index=group_index, priority=len(transitions)
                    )
                )
        self._transitions: tuple[Transition, ...] = tuple(transitions)

    @property
    def current_state(self) -> str:
        return self._current_state

    @current_state.setter
    def current_state(self, state: str) -> None:
        # Forced state: no handler runs and the previous state is kept.
        self._current_state = _check_state(state, "state")

    @property
    def previous_state(self) -> Optional[str]:
        return self._previous_state

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return self._transitions

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.name!r} current={self._current_state!r} "
            f"previous={self._previous_state!r} transitions={len(self)}>"
        )

    def match(self, next_state: str) -> tuple[Transition, ...]:
        """Transitions that ``refresh(next_state)`` would run, in priority order."""
        _check_state(next_state, "next_state", allow_empty=True)
        return tuple(
            transition
            for transition in self._transitions
            if transition.matches(self._current_state, next_state, self.regex_enabled)
        )

    def refresh(self, next_state: str) -> str:
        """Run the handlers registered for ``current -> next_state`` and move there.

        Handler exceptions are not caught: the state is only committed once
        every matching handler has returned.
        """
        for transition in self.match(next_state):
            if self.trace_enabled:
                self._trace(transition, next_state, "")

            transition.handler()

            if self.trace_enabled:
                self._trace(transition, next_state, " done.")

        self._previous_state = self._current_state
        self._current_state = next_state
        return self._current_state

    def _trace(self, transition: Transition, next_state: str, suffix: str) -> None:
        logger.debug(
            "%s %s %s -> %s do[%d].priority(%d) %s%s",
            self.name,
            transition.tag,
            self._current_state,
            next_state,
            transition.group_index,
            transition.priority,
            transition.handler_name,
            suffix,
        )

    def list_info(self) -> list[str]:
        lines = [
            f"{self.name}:{t.tag} list[{t.group_index}].priority({t.priority}) "
            f"{t.from_state} -> {t.to_state} , {t.handler_name}"
            for t in self._transitions
        ]
        for line in lines:
            logger.debug("%s", line)
        return lines
