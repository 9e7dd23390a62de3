"""
Quiz Controller

State machine behind the Skill Quiz page: load a quiz for a topic, collect
one answer per question, submit with the learner's name and keep the result.
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Union

from backend_client import BackendClient, RequestError
from models import Quiz, QuizResult, QuizSubmission

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "Web Development"
LOAD_ERROR_MESSAGE = "Failed to load quiz. Please try again."
SUBMIT_ERROR_MESSAGE = "Could not submit quiz. Please try again."

QuestionId = Union[int, str]


class QuizPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    ERROR = "error"


BUSY_PHASES = (QuizPhase.LOADING, QuizPhase.SUBMITTING)


@dataclass(frozen=True)
class QuizState:
    phase: QuizPhase = QuizPhase.IDLE
    # Sequence number of the latest request issued
    seq: int = 0
    topic: str = DEFAULT_TOPIC
    name: str = ""
    quiz: Optional[Quiz] = None
    answers: Dict[QuestionId, int] = field(default_factory=dict)
    result: Optional[QuizResult] = None
    error: str = ""

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES


# --- Events ---
@dataclass(frozen=True)
class TopicChanged:
    topic: str


@dataclass(frozen=True)
class NameChanged:
    name: str


@dataclass(frozen=True)
class QuizRequested:
    pass


@dataclass(frozen=True)
class QuizLoaded:
    seq: int
    quiz: Quiz


@dataclass(frozen=True)
class QuizLoadFailed:
    seq: int


@dataclass(frozen=True)
class AnswerSelected:
    question_id: QuestionId
    option: int


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    seq: int
    result: QuizResult


@dataclass(frozen=True)
class SubmitFailed:
    seq: int


QuizEvent = Union[TopicChanged, NameChanged, QuizRequested, QuizLoaded, QuizLoadFailed,
                  AnswerSelected, SubmitRequested, SubmitSucceeded, SubmitFailed]


def _is_answer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def can_submit(state: QuizState) -> bool:
    """True when every question has an answer, the name is long enough and nothing is pending.

    A stored result does not close the gate; the same answers may be resubmitted.
    """
    if state.quiz is None or state.busy:
        return False
    answered = all(_is_answer(state.answers.get(q.id)) for q in state.quiz.questions)
    return answered and len(state.name.strip()) > 1


def submit_payload(state: QuizState) -> QuizSubmission:
    """Build the submission, with answers in question order and None for gaps."""
    if state.quiz is None:
        raise ValueError("No quiz loaded")
    return QuizSubmission(
        name=state.name,
        topic=state.quiz.topic,
        answers=[state.answers.get(q.id) for q in state.quiz.questions],
    )


def transition(state: QuizState, event: QuizEvent) -> QuizState:
    """Return the quiz state after ``event``.

    Responses whose sequence number is not the latest, or that arrive when
    no request is pending, are ignored.

    Raises:
        TypeError: If ``event`` is not a quiz event
    """
    if isinstance(event, TopicChanged):
        return replace(state, topic=event.topic)

    if isinstance(event, NameChanged):
        return replace(state, name=event.name)

    if isinstance(event, QuizRequested):
        if not state.topic.strip():
            return state
        return replace(state, phase=QuizPhase.LOADING, seq=state.seq + 1,
                       quiz=None, answers={}, result=None, error="")

    if isinstance(event, QuizLoaded):
        if state.phase != QuizPhase.LOADING or event.seq != state.seq:
            return state
        return replace(state, phase=QuizPhase.LOADED, quiz=event.quiz)

    if isinstance(event, QuizLoadFailed):
        if state.phase != QuizPhase.LOADING or event.seq != state.seq:
            return state
        return replace(state, phase=QuizPhase.ERROR, error=LOAD_ERROR_MESSAGE)

    if isinstance(event, AnswerSelected):
        if state.quiz is None or state.busy or state.phase == QuizPhase.SUBMITTED:
            return state
        question = next((q for q in state.quiz.questions if q.id == event.question_id), None)
        if question is None or not _is_answer(event.option):
            return state
        if not 0 <= event.option < len(question.options):
            return state
        return replace(state, answers={**state.answers, question.id: event.option})

    if isinstance(event, SubmitRequested):
        if not can_submit(state):
            return state
        return replace(state, phase=QuizPhase.SUBMITTING, seq=state.seq + 1, error="")

    if isinstance(event, SubmitSucceeded):
        if state.phase != QuizPhase.SUBMITTING or event.seq != state.seq:
            return state
        return replace(state, phase=QuizPhase.SUBMITTED, result=event.result)

    if isinstance(event, SubmitFailed):
        if state.phase != QuizPhase.SUBMITTING or event.seq != state.seq:
            return state
        return replace(state, phase=QuizPhase.ERROR, error=SUBMIT_ERROR_MESSAGE)

    raise TypeError(f"Unknown quiz event: {event!r}")


class QuizController:
    """Drives :func:`transition` with backend calls for the quiz page."""

    def __init__(self, client: BackendClient, topic: str = DEFAULT_TOPIC):
        self.client = client
        self.state = QuizState(topic=topic)

    def dispatch(self, event: QuizEvent) -> QuizState:
        new_state = transition(self.state, event)
        if new_state.phase != self.state.phase:
            logger.debug("quiz %s -> %s", self.state.phase.value, new_state.phase.value)
        self.state = new_state
        return new_state

    @property
    def can_submit(self) -> bool:
        return can_submit(self.state)

    def set_topic(self, topic: str) -> QuizState:
        return self.dispatch(TopicChanged(topic))

    def set_name(self, name: str) -> QuizState:
        return self.dispatch(NameChanged(name))

    def select_answer(self, question_id: QuestionId, option: int) -> QuizState:
        return self.dispatch(AnswerSelected(question_id, option))

    def start_quiz(self) -> QuizState:
        before = self.state.seq
        self.dispatch(QuizRequested())
        if self.state.seq == before:
            return self.state
        seq = self.state.seq
        try:
            quiz = self.client.get_quiz(self.state.topic)
        except RequestError as e:
            logger.warning("Loading quiz for %r failed: %s", self.state.topic, e)
            return self.dispatch(QuizLoadFailed(seq))
        return self.dispatch(QuizLoaded(seq, quiz))

    def submit_quiz(self) -> QuizState:
        if self.state.quiz is None:
            return self.state
        before = self.state.seq
        self.dispatch(SubmitRequested())
        if self.state.seq == before:
            return self.state
        seq = self.state.seq
        payload = submit_payload(self.state)
        try:
            result = self.client.submit_quiz(payload.name, payload.topic, payload.answers)
        except RequestError as e:
            logger.warning("Submitting quiz failed: %s", e)
            return self.dispatch(SubmitFailed(seq))
        logger.info("Quiz on %r submitted: passed=%s score=%s",
                    payload.topic, result.passed, result.score)
        return self.dispatch(SubmitSucceeded(seq, result))

    def certificate_url(self) -> Optional[str]:
        result = self.state.result
        if result is None or not result.certificate_id:
            return None
        return self.client.certificate_url(result.certificate_id)
