'''Candidate specifications and the candidate interner.

Any hashable object that is not a set or a tuple can be used as a candidate
(strings are the most common choice). The :class:`Candidate` class is just
a type marker that recognizes such objects.

Tallies do not store candidate objects in their running totals directly;
they map them to dense integer identifiers with a :class:`CandidateInterner`
first, so that the totals can be indexed by integers and the original
candidate objects are only needed again to present the results.
'''

import abc
import collections.abc
from typing import Any, Dict, Iterable, Iterator, List, Optional


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class UnknownCandidate(CandidateError):
    '''A ballot names a candidate outside a closed candidate set.

    Only raised by tallies that were given an explicit list of candidates
    at construction.
    '''
    def __init__(self, candidate: Any):
        super().__init__(candidate, 'one of the registered candidates')


class Candidate(metaclass=abc.ABCMeta):
    '''An abstract class for election candidates.

    The subclass check is overridden so that any hashable object that is not
    a set or tuple is accepted. Subclasses will not inherit this override.
    Tuples are excluded because ranked ballots are given as sequences of
    ``(candidate, rank)`` tuples.
    '''
    @classmethod
    def __subclasshook__(cls, subcl):
        if cls is Candidate:
            return (
                hasattr(subcl, '__hash__')
                and subcl.__hash__ is not None
                and not issubclass(subcl, collections.abc.Set)
                and not issubclass(subcl, tuple)
            )
        else:
            return super().__subclasshook__(subcl)


class CandidateInterner:
    '''Map candidates to dense zero-based integer identifiers.

    A candidate gets the identifier equal to the number of candidates seen
    before it, the first time it is interned. Identifiers are never reused
    or reordered, so they stay valid for the lifetime of the interner.

    :param candidates: Candidates to intern right away, in this order.
    :param closed: If True, no candidates can be added after the initial
        ones; :meth:`lookup` raises :class:`UnknownCandidate` for them.
    '''
    def __init__(self,
                 candidates: Optional[Iterable[Candidate]] = None,
                 closed: bool = False,
                 ):
        self._ids: Dict[Candidate, int] = {}
        self._values: List[Candidate] = []
        self.closed = False
        if candidates is not None:
            for cand in candidates:
                self.intern(cand)
        self.closed = closed

    def intern(self, candidate: Candidate) -> int:
        '''Return the identifier of the candidate, assigning one if needed.

        :raises CandidateError: If the candidate is not hashable or is a set
            or tuple.
        :raises UnknownCandidate: If the interner is closed and has not seen
            the candidate.
        '''
        cand_id = self._ids.get(candidate) \
            if isinstance(candidate, Candidate) else None
        if cand_id is not None:
            return cand_id
        self.check(candidate)
        cand_id = len(self._values)
        self._ids[candidate] = cand_id
        self._values.append(candidate)
        return cand_id

    def check(self, candidate: Any) -> None:
        '''Check that the candidate could be interned without error.

        Does not intern the candidate.

        :raises CandidateError: If the candidate is not hashable or is a set
            or tuple.
        :raises UnknownCandidate: If the interner is closed and has not seen
            the candidate.
        '''
        if not isinstance(candidate, Candidate):
            raise CandidateError(candidate, 'a hashable non-tuple object')
        if self.closed and candidate not in self._ids:
            raise UnknownCandidate(candidate)

    def lookup(self, candidate: Candidate) -> Optional[int]:
        '''Return the identifier of a candidate without interning it.

        :returns: None if the candidate was not interned yet.
        '''
        return self._ids.get(candidate)

    def candidates(self) -> List[Candidate]:
        '''Return all interned candidates, ordered by their identifiers.'''
        return list(self._values)

    def __getitem__(self, cand_id: int) -> Candidate:
        return self._values[cand_id]

    def __contains__(self, candidate: Any) -> bool:
        return candidate in self._ids

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
