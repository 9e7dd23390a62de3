"""
View Controller

Top-level Career Hub view state: the home page, or the results page while a
learning plan loads, fails or is shown. Every search gets a sequence number
and only the response to the latest search is applied.
"""
import logging
from dataclasses import dataclass
from typing import Union

from backend_client import BackendClient, RequestError
from models import LearningPlan

logger = logging.getLogger(__name__)

PLAN_ERROR_MESSAGE = "Something went wrong generating your plan."
QUICK_TOPICS = ["AI Engineer", "Full-Stack Developer", "Data Analyst", "Mobile Developer"]


# --- States (seq is the latest search issued) ---
@dataclass(frozen=True)
class Home:
    seq: int = 0


@dataclass(frozen=True)
class ResultsLoading:
    seq: int
    query: str


@dataclass(frozen=True)
class ResultsError:
    seq: int
    message: str = PLAN_ERROR_MESSAGE


@dataclass(frozen=True)
class ResultsPlan:
    seq: int
    plan: LearningPlan


ViewState = Union[Home, ResultsLoading, ResultsError, ResultsPlan]


# --- Events ---
@dataclass(frozen=True)
class SearchSubmitted:
    query: str


@dataclass(frozen=True)
class PlanLoaded:
    seq: int
    plan: LearningPlan


@dataclass(frozen=True)
class PlanFailed:
    seq: int
    detail: str = ""


ViewEvent = Union[SearchSubmitted, PlanLoaded, PlanFailed]


def transition(state: ViewState, event: ViewEvent) -> ViewState:
    """Return the view state after ``event``.

    A response is applied only while the matching search is still loading;
    anything else is a stale response and leaves the state unchanged.

    Raises:
        TypeError: If ``event`` is not a view event
    """
    if isinstance(event, SearchSubmitted):
        return ResultsLoading(seq=state.seq + 1, query=event.query)

    if isinstance(event, (PlanLoaded, PlanFailed)):
        if not isinstance(state, ResultsLoading) or event.seq != state.seq:
            return state
        if isinstance(event, PlanLoaded):
            return ResultsPlan(seq=state.seq, plan=event.plan)
        return ResultsError(seq=state.seq)

    raise TypeError(f"Unknown view event: {event!r}")


class ViewController:
    """Runs learning-plan searches against the backend."""

    def __init__(self, client: BackendClient):
        self.client = client
        self.state: ViewState = Home()

    @property
    def loading(self) -> bool:
        return isinstance(self.state, ResultsLoading)

    def dispatch(self, event: ViewEvent) -> ViewState:
        new_state = transition(self.state, event)
        if new_state is self.state and not isinstance(event, SearchSubmitted):
            logger.debug("Discarded stale response for search #%s", event.seq)
        self.state = new_state
        return new_state

    def begin_search(self, query: str) -> int:
        """Enter the loading state and return the new search's sequence number."""
        self.dispatch(SearchSubmitted(query))
        return self.state.seq

    def resolve(self, seq: int, plan: LearningPlan) -> ViewState:
        return self.dispatch(PlanLoaded(seq, plan))

    def fail(self, seq: int, detail: str = "") -> ViewState:
        return self.dispatch(PlanFailed(seq, detail))

    def search(self, query: str) -> ViewState:
        seq = self.begin_search(query)
        try:
            plan = self.client.learning_plan(query)
        except RequestError as e:
            logger.warning("Learning plan for %r failed: %s", query, e)
            return self.fail(seq, str(e))
        return self.resolve(seq, plan)
