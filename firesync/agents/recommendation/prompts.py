"""
Recommendation Prompt Templates

Contains the system prompt and one user prompt template per recommendation mode.

Architecture:
- Pattern: Single-shot structured generation (one Gemini call per request)
- Model: Gemini 2.5 Flash
- Output: Structured JSON (response_mime_type + response_schema)

Prompt Engineering Pattern:
- Uses XML tags for structured content
- System prompt defines the role only
- User prompt contains mode-specific context, hard constraints and at least
  one literal example output matching the mode's output schema
- Templates are fixed strings with named placeholders. User-supplied text is
  escaped before interpolation so it cannot open or close an XML section.
"""

from html import escape
from typing import Any, Callable, Dict

from pydantic import BaseModel

from firesync.agents.recommendation.schemas import RecommendationMode
from firesync.schemas.analysis import WatchPatternAnalysisInput
from firesync.schemas.recommendations import (
    GroupCompromiseRecommendationInput,
    PersonalizedRecommendationInput,
    SurpriseRecommendationInput,
    TextQueryRecommendationInput,
)
from firesync.utils.constants import (
    CONTENT_TYPE_LABELS,
    DEFAULT_HISTORY_WEIGHT,
    DEFAULT_MOOD_WEIGHT,
    GROUP_MAX_ITEMS,
    GROUP_MIN_ITEMS,
    SURPRISE_ITEM_COUNT,
    TEXT_QUERY_ITEM_COUNT,
)

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = """You are FireSync, a recommendation expert for movies and TV series.

<role>
You help users decide what to watch. You know films and series across genres,
decades and countries, and which streaming platforms carry them.
</role>

<core_requirements>
1. Recommend only real, existing movies or TV series. Never invent titles.
2. Every recommendation has a title, a description, a reason and a platform.
3. The reason must be specific to the user context you are given.
4. Respect the requested content type exactly.
</core_requirements>

<output_format>
Always return valid JSON matching the schema you are given.
No markdown code blocks, no explanatory text, only the JSON value.
</output_format>"""


# =============================================================================
# SHARED FRAGMENTS
# =============================================================================

CONTENT_TYPE_RULES = {
    "MOVIES": "The content type is 'MOVIES': recommend ONLY movies. Do NOT include any TV series.",
    "TV_SERIES": "The content type is 'TV_SERIES': recommend ONLY TV series. Do NOT include any movies.",
    "BOTH": "The content type is 'BOTH': recommend a mix of movies and TV series.",
}


def language_rule(language: str) -> str:
    """Instruction line for the language filter."""
    if language == "Any":
        return "Language 'Any': titles may be in any original language."
    return f"Language '{language}': recommend only titles originally produced in {language}."


def escape_prompt_text(value: str) -> str:
    """
    Escape characters meaningful to the prompt's XML-tag sections.

    Only &, < and > change. Text containing them is therefore not literal in
    the rendered prompt ("Tom & Jerry" becomes "Tom &amp; Jerry").
    """
    return escape(value, quote=False)


# =============================================================================
# PERSONALIZED
# =============================================================================

PERSONALIZED_TEMPLATE = """Generate a list of personalized {content_label} recommendations.

<context>
Current Mood: {mood}
Time of Day: {time_of_day}
Preferred Content Type: {content_type}
</context>

<viewing_history>
{viewing_history}
</viewing_history>

<instructions>
1. Base your recommendations on the user's current mood, the time of day, their viewing history and their preferred content type.
2. Pay attention to 'moodAtWatch' / 'mood when watched' for items in the viewing history. It is the user's mood when they watched that item. For example, if the user watched action movies when they were 'Excited' and their current mood is 'Excited', similar action movies are a good fit.
3. {content_type_rule}
4. For each recommendation provide:
   - title: The title of the movie or TV series (string)
   - description: A brief description (string)
   - reason: Why you suggest it, incorporating moodAtWatch insights if relevant (string)
   - platform: The OTT platform it is available on, e.g. Netflix, Amazon Prime Video, Hulu (string)
</instructions>

<example>
A valid JSON array with a single item:
[
  {{
    "title": "Example Movie",
    "description": "An exciting adventure.",
    "reason": "Matches your adventurous mood and you enjoyed similar action films when you were feeling adventurous.",
    "platform": "Netflix"
  }}
]
</example>

Return a JSON array of recommendations. Ensure the entire output is a valid JSON array."""


def build_personalized_prompt(request: PersonalizedRecommendationInput) -> str:
    """Render the personalized prompt. History text goes through escape_prompt_text."""
    return PERSONALIZED_TEMPLATE.format(
        content_label=CONTENT_TYPE_LABELS[request.content_type],
        mood=request.mood,
        time_of_day=request.time_of_day,
        content_type=request.content_type,
        viewing_history=escape_prompt_text(request.viewing_history),
        content_type_rule=CONTENT_TYPE_RULES[request.content_type],
    )


# =============================================================================
# TEXT QUERY
# =============================================================================

TEXT_QUERY_TEMPLATE = """The user has typed a specific search query for what they want to watch.
Fulfill the query first, then use their context to choose among and personalize the matches.

<query>
{user_query}
</query>

<context>
Current Mood: {mood}
Time of Day: {time_of_day}
Preferred Content Type: {content_type}
Preferred Language: {language}
</context>

<viewing_history>
{viewing_history}
</viewing_history>

<critical_requirements>
YOU MUST:
1. {content_type_rule}
2. {language_rule}
3. Return EXACTLY {item_count} recommendations.
</critical_requirements>

<instructions>
1. Primarily focus on fulfilling the user's search query.
2. Use the context (mood, time of day, history, content type) to pick the most suitable options when several titles match, or to tailor the suggestions. For example, if the query is "funny movie" and the mood is "Happy", lean towards upbeat comedies. If the history shows enjoyment of animated films and the query is "adventure", animated adventures are a good fit.
3. For each recommendation provide:
   - title: The title of the movie or TV series (string)
   - description: A brief description (string)
   - reason: Explain WHY it matches the query AND how the context (mood, time, history) influenced the choice (string)
   - platform: The OTT platform it is available on (string)
</instructions>

<example>
A valid item if the query was "movie about a mouse", mood "Happy", time "Evening":
{{
  "title": "Stuart Little",
  "description": "A charming movie about a mouse adopted by a human family.",
  "reason": "Matches your search for a movie about a mouse. It is lighthearted and upbeat, perfect for a family evening and your happy mood.",
  "platform": "Netflix"
}}
</example>

Return a JSON array of {item_count} recommendations. Ensure the entire output is a valid JSON array."""


def build_text_query_prompt(request: TextQueryRecommendationInput) -> str:
    """
    Render the free-text search prompt.

    The query is embedded verbatim except for the XML-significant characters
    &, < and >, which are entity-escaped. A query such as "Tom & Jerry" appears
    in the prompt as "Tom &amp; Jerry"; quotes, braces and all other text are
    kept as typed.
    """
    return TEXT_QUERY_TEMPLATE.format(
        user_query=escape_prompt_text(request.user_query),
        mood=request.mood,
        time_of_day=request.time_of_day,
        content_type=request.content_type,
        language=request.language,
        viewing_history=escape_prompt_text(request.viewing_history),
        content_type_rule=CONTENT_TYPE_RULES[request.content_type],
        language_rule=language_rule(request.language),
        item_count=TEXT_QUERY_ITEM_COUNT,
    )


# =============================================================================
# SURPRISE
# =============================================================================

SURPRISE_TEMPLATE = """Act as a film and TV aficionado with eclectic taste, helping the user break out of their viewing bubble.
Generate "surprise" {content_label} recommendations: hidden gems, critically acclaimed but overlooked titles, or content from genres the user does not usually watch.

<viewing_history>
The user's viewing history. Recommend something DIFFERENT from it:
{viewing_history}
</viewing_history>

<context>
Preferred Content Type: {content_type}
</context>

<critical_requirements>
- DO NOT recommend anything obviously similar to the user's viewing history.
- AVOID major blockbusters or the most popular titles, unless they come from a genre completely absent from the user's history.
- PRIORITIZE diversity in genre, tone and origin (for example international films and series).
- The 'reason' MUST explain why it is a good surprise and how it differs from and expands on the user's history.
- {content_type_rule}
- Return EXACTLY {item_count} recommendations.
</critical_requirements>

<example>
A valid item:
{{
  "title": "A Hidden Gem Movie",
  "description": "A thought-provoking indie drama.",
  "reason": "Your history shows a lot of action comedies. This film is a complete change of pace, a powerful character study that might reveal a new genre you'll love.",
  "platform": "Mubi"
}}
</example>

Return a JSON array of {item_count} recommendations. Ensure the entire output is a valid JSON array."""


def build_surprise_prompt(request: SurpriseRecommendationInput) -> str:
    """Render the surprise/discovery prompt."""
    return SURPRISE_TEMPLATE.format(
        content_label=CONTENT_TYPE_LABELS[request.content_type],
        viewing_history=escape_prompt_text(request.viewing_history),
        content_type=request.content_type,
        content_type_rule=CONTENT_TYPE_RULES[request.content_type],
        item_count=SURPRISE_ITEM_COUNT,
    )


# =============================================================================
# GROUP COMPROMISE
# =============================================================================

GROUP_COMPROMISE_TEMPLATE = """You are recommending for a group of two people. Their individual top preferences do not overlap, or you are supplementing their common picks.
Suggest {min_items}-{max_items} {content_label} that are a good compromise or appeal to shared broader tastes.

<first_user_profile>
{user1_profile_summary}
</first_user_profile>

<second_user_profile>
{user2_profile_summary}
</second_user_profile>

<context>
Current Time of Day: {current_time_of_day}
Target Content Type: {target_content_type}
</context>

<instructions>
1. Look for common genres or themes that could appeal to both, even if not their absolute top preference.
2. If their moods conflict, aim for content that is generally well received, critically acclaimed or a safe bet.
3. The time of day may influence the tone (for example lighter content during the day).
4. {content_type_rule}
5. Each recommendation needs a title, a description, a platform and a 'reason' explaining why it is a good pick for THIS GROUP.
6. In the reason, refer to the users by the exact names given in their profile summaries, or say "both users" when appropriate.
7. Return between {min_items} and {max_items} recommendations.
</instructions>

<example>
A valid item when the profiles are named "Admin" and "Parth":
{{
  "title": "Compromise Choice Movie",
  "description": "A widely acclaimed film that blends genres.",
  "reason": "While Admin enjoys action and Parth prefers drama, this film offers strong storytelling and compelling characters that both might appreciate, suitable for an evening watch.",
  "platform": "HBO Max"
}}
</example>

Return a JSON array of recommendations. Ensure the entire output is a valid JSON array."""


def build_group_compromise_prompt(request: GroupCompromiseRecommendationInput) -> str:
    """
    Render the group-compromise prompt.

    Both profile summaries are escaped, so names containing &, < or > show up
    as XML entities inside the profile sections.
    """
    return GROUP_COMPROMISE_TEMPLATE.format(
        min_items=GROUP_MIN_ITEMS,
        max_items=GROUP_MAX_ITEMS,
        content_label=CONTENT_TYPE_LABELS[request.target_content_type],
        user1_profile_summary=escape_prompt_text(request.user1_profile_summary),
        user2_profile_summary=escape_prompt_text(request.user2_profile_summary),
        current_time_of_day=request.current_time_of_day,
        target_content_type=request.target_content_type,
        content_type_rule=CONTENT_TYPE_RULES[request.target_content_type],
    )


# =============================================================================
# WATCH PATTERN ANALYSIS
# =============================================================================

WATCH_PATTERN_ANALYSIS_TEMPLATE = """Analyze the user's viewing history, current mood and time of day to tune how their recommendations are weighted.

<viewing_history>
{viewing_history}
</viewing_history>

<context>
Current Mood: {current_mood}
Current Time: {current_time}
</context>

<critical_requirements>
You MUST return a single JSON object with ALL FOUR of these fields:
1. 'explanation': An explanation of your reasoning (string, MANDATORY).
2. 'moodWeight': Suggested influence of mood as a NUMBER between 0 and 100 (percentage, MANDATORY). If you have no specific suggestion, use {default_mood_weight}.
3. 'historyWeight': Suggested influence of viewing history as a NUMBER between 0 and 100 (percentage, MANDATORY). If you have no specific suggestion, use {default_history_weight}.
4. 'contentMix': An ARRAY of objects {{"genre": string, "proportion": NUMBER between 0 and 1}}, proportions ideally summing to 1 (MANDATORY). If no content mix is applicable, return an empty array [].
Entries in the history may carry 'moodAtWatch', the user's mood when they watched that title. Use it to relate the current mood to past choices.
</critical_requirements>

<examples>
<example>
A valid output with specific suggestions:
{{
  "explanation": "Given the user's high ratings for recent comedies and their current 'Happy' mood, comedy recommendations should be prioritized. Suggesting mood influence at 70% and history at 20%.",
  "moodWeight": 70,
  "historyWeight": 20,
  "contentMix": [
    {{"genre": "comedy", "proportion": 0.6}},
    {{"genre": "action", "proportion": 0.3}},
    {{"genre": "documentary", "proportion": 0.1}}
  ]
}}
</example>

<example>
A valid output with default weights and no specific content mix:
{{
  "explanation": "User has very little history, so focus on mood. No specific content mix can be derived yet. Using default weights.",
  "moodWeight": {default_mood_weight},
  "historyWeight": {default_history_weight},
  "contentMix": []
}}
</example>
</examples>

Ensure the JSON is valid and all four fields are present with the correct numeric types."""


def build_watch_pattern_analysis_prompt(request: WatchPatternAnalysisInput) -> str:
    """Render the watch-pattern analysis prompt."""
    return WATCH_PATTERN_ANALYSIS_TEMPLATE.format(
        viewing_history=escape_prompt_text(request.viewing_history),
        current_mood=request.current_mood,
        current_time=request.current_time,
        default_mood_weight=DEFAULT_MOOD_WEIGHT,
        default_history_weight=DEFAULT_HISTORY_WEIGHT,
    )


# =============================================================================
# DISPATCH
# =============================================================================

PROMPT_BUILDERS: Dict[RecommendationMode, Callable[[Any], str]] = {
    RecommendationMode.PERSONALIZED: build_personalized_prompt,
    RecommendationMode.TEXT_QUERY: build_text_query_prompt,
    RecommendationMode.SURPRISE: build_surprise_prompt,
    RecommendationMode.GROUP_COMPROMISE: build_group_compromise_prompt,
    RecommendationMode.WATCH_PATTERN_ANALYSIS: build_watch_pattern_analysis_prompt,
}


def render_prompt(mode: RecommendationMode, request: BaseModel) -> str:
    """Render the user prompt for a validated mode input."""
    return PROMPT_BUILDERS[RecommendationMode(mode)](request)
