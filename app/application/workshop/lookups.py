"""
Use cases: unpaginated lookups used to fill pickers in the front end.

Input: a client id, or nothing for active branches.
Output: lists of records in a fixed order.
"""

from app.domain.workshop.entities import Record, RecordQuery
from app.domain.workshop.ports import RecordRepository

ACTIVE_BRANCH_FIELDS = ("id", "name", "code", "city")


class ListClientVehiclesUseCase:
    """A client's vehicles, newest first."""

    def __init__(self, vehicles: RecordRepository) -> None:
        self._vehicles = vehicles

    def execute(self, client_id: int) -> list[Record]:
        return self._vehicles.find_all(
            RecordQuery(equals={"clientId": client_id}, sort_by="createdAt")
        )


class ListClientOpportunitiesUseCase:
    """A client's opportunities, earliest follow-up first."""

    def __init__(self, opportunities: RecordRepository) -> None:
        self._opportunities = opportunities

    def execute(self, client_id: int) -> list[Record]:
        return self._opportunities.find_all(
            RecordQuery(
                equals={"clientId": client_id},
                sort_by="followUpDate",
                descending=False,
            )
        )


class ListActiveBranchesUseCase:
    """Active branches by name, reduced to the fields a picker needs."""

    def __init__(self, branches: RecordRepository) -> None:
        self._branches = branches

    def execute(self) -> list[Record]:
        branches = self._branches.find_all(
            RecordQuery(equals={"isActive": True}, sort_by="name", descending=False)
        )
        return [
            {field: branch.get(field) for field in ACTIVE_BRANCH_FIELDS}
            for branch in branches
        ]
