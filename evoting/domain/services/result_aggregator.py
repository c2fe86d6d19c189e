"""Winner selection for finished elections."""

from evoting.domain.entities.candidate import Candidate


class ResultAggregator:
    """Picks the winning candidate of a finished election."""

    @staticmethod
    def select_winner(candidates: list[Candidate]) -> Candidate | None:
        """Return the candidate with the highest tally.

        Ties go to the candidate that comes first in ``candidates``, which
        callers pass in creation order.
        """
        winner: Candidate | None = None
        for candidate in candidates:
            if winner is None or candidate.tally > winner.tally:
                winner = candidate
        return winner
