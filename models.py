# Pydantic models for backend requests/responses (shared by the client and both apps)
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class SignupRequest(BaseModel):
    firstName: str
    lastName: str
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class VerifyResponse(BaseModel):
    valid: bool = False


class Video(BaseModel):
    title: str = ""
    url: str


class Step(BaseModel):
    title: str
    description: str = ""
    skillsToLearn: List[str] = []
    videos: List[Video] = []


class LearningPlan(BaseModel):
    title: str
    description: str = ""
    keySkills: List[str] = []
    learningPath: List[Step] = []


class Question(BaseModel):
    id: Union[int, str]
    question: str
    options: List[str]


class Quiz(BaseModel):
    topic: str
    questions: List[Question] = []


class QuizSubmission(BaseModel):
    name: str
    topic: str
    answers: List[Optional[int]]


class QuizResult(BaseModel):
    passed: bool
    score: float
    correct: int
    total: int
    certificate_id: Optional[str] = None


Certificate = Dict[str, Any]
