"""
Progress Engine - Therapy Session Progress Tracking with Gemini

Turns a therapy chat transcript into a persisted progress record:
session summary, goals, improvements and emotional journey.

Layers:
1. Models & errors (records, status rules) - models.py, errors.py
2. Response parsing (free text -> records) - parsers.py
3. Prompts & model client (Gemini) - prompts.py, gemini_client.py
4. Session analyses (one per prompt) - analyzer.py
5. Engagement trend (segment averaging) - trends.py
6. History store (bounded, retried writes) - store.py, retry.py
7. Progress tracker (aggregation, session end) - tracker.py
"""

from .errors import (
    ProgressEngineError,
    ConfigurationError,
    ProgressTrackingError,
    MessageValidationError,
    ProgressSaveError,
)

from .models import (
    Message,
    Goal,
    GoalDetail,
    GoalStatus,
    Improvements,
    EmotionPoint,
    DominantEmotion,
    EmotionAnalysis,
    EmotionalJourney,
    SessionAnalysis,
    ProgressReport,
    ProgressRecord,
    determine_goal_status,
    is_valid_progress_record,
)

from .parsers import (
    parse_session_analysis,
    parse_progress_report,
    parse_goal_list,
    parse_improvement_list,
    parse_engagement,
    parse_emotion_list,
    parse_manual_report,
    extract_bullet_points,
)

from .retry import retry_operation

from .gemini_client import (
    TextModel,
    GeminiTextModel,
)

from .analyzer import (
    SessionAnalyzer,
    AnalysisResult,
)

from .trends import (
    split_into_segments,
    average_engagement_levels,
)

from .store import (
    StoragePort,
    MemoryStorage,
    FileStorage,
    ProgressHistoryStore,
)

from .tracker import (
    ProgressTracker,
    merge_goals,
    generate_comprehensive_summary,
    initialize_progress_tracker,
)

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ProgressEngineError",
    "ConfigurationError",
    "ProgressTrackingError",
    "MessageValidationError",
    "ProgressSaveError",
    # Models
    "Message",
    "Goal",
    "GoalDetail",
    "GoalStatus",
    "Improvements",
    "EmotionPoint",
    "DominantEmotion",
    "EmotionAnalysis",
    "EmotionalJourney",
    "SessionAnalysis",
    "ProgressReport",
    "ProgressRecord",
    "determine_goal_status",
    "is_valid_progress_record",
    # Parsers
    "parse_session_analysis",
    "parse_progress_report",
    "parse_goal_list",
    "parse_improvement_list",
    "parse_engagement",
    "parse_emotion_list",
    "parse_manual_report",
    "extract_bullet_points",
    # Retry
    "retry_operation",
    # Gemini
    "TextModel",
    "GeminiTextModel",
    # Analyses
    "SessionAnalyzer",
    "AnalysisResult",
    # Trends
    "split_into_segments",
    "average_engagement_levels",
    # Store
    "StoragePort",
    "MemoryStorage",
    "FileStorage",
    "ProgressHistoryStore",
    # Tracker
    "ProgressTracker",
    "merge_goals",
    "generate_comprehensive_summary",
    "initialize_progress_tracker",
]
