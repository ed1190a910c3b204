from fastapi import Depends

from app.core.config import Settings, get_notification_settings, get_settings
from app.services.generation import ChatCompletionsQuestionGenerator
from app.services.notifier import SourcingNotifier
from app.services.progress import ProgressTracker
from app.services.question_factory import QuestionFactory
from app.services.question_store import SupabaseQuestionStore


def get_sourcing_notifier() -> SourcingNotifier:
    return SourcingNotifier.from_settings(get_notification_settings())


def get_question_factory(settings: Settings = Depends(get_settings)) -> QuestionFactory:
    return QuestionFactory(
        generator=ChatCompletionsQuestionGenerator.from_settings(settings),
        store=SupabaseQuestionStore.from_settings(settings),
    )


def get_progress_tracker() -> ProgressTracker:
    return ProgressTracker()
