'''Candidate rosters.

A roster fixes the set of candidates for one election before any ballot is
recorded. Candidates are identified by their integer index (their position
in the roster) everywhere in the tabulation machinery; names are only used
to translate from and to the outside world.
'''

from typing import Any, Iterable, List, Tuple


MAX_CANDIDATES: int = 9
'''Default upper bound on the number of candidates in a single election.

The cycle check performed when locking pairs is quartic in the number of
candidates overall, so the bound must stay small.
'''


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. an unknown or duplicate candidate name, or a roster exceeding
    the maximum number of candidates.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class CandidateCountError(CandidateError):
    '''Too many candidates were nominated for the election.

    :param count: Number of candidates nominated.
    :param max_count: Maximum permissible number of candidates.
    '''
    def __init__(self, count: int, max_count: int):
        self.count = count
        self.max_count = max_count
        super().__init__(
            f'{count} candidates', f'at most {max_count} candidates'
        )


class CandidateRoster:
    '''An immutable list of candidate names mapped to their indices.

    :param names: Display names of the candidates, in index order. Must be
        unique non-empty strings.
    :param max_candidates: Maximum number of candidates allowed.
    :raises CandidateError: If a name is blank or repeated.
    :raises CandidateCountError: If there are more than `max_candidates`
        names.
    '''
    def __init__(self,
                 names: Iterable[str],
                 max_candidates: int = MAX_CANDIDATES,
                 ):
        names = tuple(names)
        if len(names) > max_candidates:
            raise CandidateCountError(len(names), max_candidates)
        indices = {}
        for i, name in enumerate(names):
            if not isinstance(name, str) or not name.strip():
                raise CandidateError(name, 'a non-empty string')
            if name in indices:
                raise CandidateError(name, 'a unique name')
            indices[name] = i
        self._names = names
        self._indices = indices
        self.max_candidates = max_candidates

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def index(self, name: str) -> int:
        '''Return the index of the candidate with the given name.

        :raises CandidateError: If there is no such candidate.
        '''
        try:
            return self._indices[name]
        except KeyError:
            raise CandidateError(name, 'one of ' + ', '.join(self._names))

    def name(self, index: int) -> str:
        return self._names[index]

    def indices(self, names: Iterable[str]) -> List[int]:
        return [self.index(name) for name in names]

    def __contains__(self, name: Any) -> bool:
        return name in self._indices

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, CandidateRoster)
            and self._names == other._names
        )

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f'<CandidateRoster({", ".join(self._names)})>'
