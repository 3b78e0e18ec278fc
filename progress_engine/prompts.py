"""
Prompt builders for the session analyses.

Each builder is deterministic: the same messages always produce the
same prompt text.
"""

from typing import List, Sequence

from .config import ASSISTANT_LABEL
from .models import Message


def format_conversation(messages: Sequence[Message], assistant_label: str = ASSISTANT_LABEL) -> str:
    """One ``role: text`` line per message."""
    return "\n".join(
        f"{'User' if m.is_user else assistant_label}: {m.text}" for m in messages
    )


def build_emotion_prompt(messages: Sequence[Message]) -> str:
    """Emotion analysis only looks at the user's side of the conversation."""
    user_lines = "\n".join(f"{m.timestamp}: {m.text}" for m in messages if m.is_user)
    return f"""Analyze the emotional content of these messages and provide:
1. Emotional state for each message (format: timestamp|emotion|intensity)
2. Distribution of dominant emotions (in percentages)

Start the distribution with the line "Distribution:" followed by
emotion: percentage% pairs.

Messages:
{user_lines}"""


def build_engagement_prompt(conversation: str) -> str:
    return f"""Analyze this therapy conversation and rate the following aspects from 0-100.
Return ONLY the five numbers separated by commas in this exact order:

1. Participation (frequency and length of responses)
2. Emotional Depth (level of emotional disclosure)
3. Self-Reflection (insight and introspection)
4. Progress (movement towards therapeutic goals)
5. Openness (willingness to engage and share)

Example response format: 85,70,65,75,80

Conversation:
{conversation}"""


def build_summary_prompt(conversation: str) -> str:
    return f"""Analyze this therapy conversation and provide a concise summary of the key points discussed.
Focus on the main topics, insights gained, and any breakthroughs or challenges identified.
Format the summary as clear, numbered points.

Conversation:
{conversation}"""


def build_goals_prompt(conversation: str) -> str:
    return f"""Analyze this therapy conversation and identify the goals discussed.
For each goal, provide:
1. A clear title
2. A brief description
3. An estimated progress percentage (0-100)
4. Current status (not-started, in-progress, or achieved)

Format each goal as below, with a blank line between goals:
Title: [title]
Description: [description]
Progress: [X]%
Status: [status]

Conversation:
{conversation}"""


def build_improvements_prompt(conversation: str) -> str:
    return f"""Analyze this therapy conversation and identify:
1. Key strengths demonstrated by the user
2. Current challenges or areas for growth
3. Specific recommendations for improvement

Format the response exactly as:
Strengths:
- [strength 1]
- [strength 2]

Challenges:
- [challenge 1]
- [challenge 2]

Recommendations:
- [recommendation 1]
- [recommendation 2]

Conversation:
{conversation}"""


def build_session_analysis_prompt(texts: List[str]) -> str:
    conversation = "\n".join(texts)
    return f"""Analyze this therapy conversation and provide a structured response with:

Emotional State: [User's current emotional state]

Key Topics:
- [Topic 1]
- [Topic 2]
...

Insights:
- [Insight 1]
- [Insight 2]
...

Conversation:
{conversation}"""


def build_progress_report_prompt(conversation: str) -> str:
    return f"""Based on this therapy conversation, provide a structured progress report in the following format:

Summary:
[Brief summary of the session and key points discussed]

Goals:
[Goal 1] | [Progress percentage]% - [Status: not-started/in-progress/achieved]
[Goal 2] | [Progress percentage]% - [Status: not-started/in-progress/achieved]
...

Improvements:
Strengths: [Strength 1] - [Strength 2] - [Strength 3]
Challenges: [Challenge 1] - [Challenge 2] - [Challenge 3]
Recommendations: [Recommendation 1] - [Recommendation 2] - [Recommendation 3]

Conversation:
{conversation}"""


def build_manual_report_prompt(conversation: str) -> str:
    return f"""Analyze this therapy conversation and provide structured insights:
1. Overall Session Summary:
- Key points discussed
- Main themes
- Progress made

2. Emotional Journey:
- Initial emotional state
- Changes in emotional state
- Current emotional state

3. Strengths Demonstrated:
- Coping mechanisms used
- Positive behaviors
- Insights gained

4. Challenges Identified:
- Current difficulties
- Obstacles to progress
- Areas needing attention

5. Recommendations:
- Suggested coping strategies
- Areas for practice
- Next steps

Conversation:
{conversation}

Provide your analysis in a clear, structured format with bullet points."""
