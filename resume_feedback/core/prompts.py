"""
Centralized AI Prompt Repository
- Keeps both providers on identical instructions
- Decouples prompts from pipeline logic
"""

# --- INSIGHT EXTRACTION PROMPTS ---
INSIGHT_EXTRACTION_SYSTEM = (
    "You are an expert in analyzing resume advice from Reddit. "
    "Extract key insights, categorize them, and determine sentiment. "
    "Respond with JSON only."
)

INSIGHT_EXTRACTION_USER_TEMPLATE = """Here are recent posts from r/{topic}:

{documents}

Extract exactly 10 key resume insights from these posts. For each insight, provide:
1. "insight": the actionable advice itself
2. "section": which resume section it applies to (Summary, Work Experience, Education, Skills, Format, General)
3. "category": e.g. ATS Optimization, Content Quality, Formatting, Impact Statements
4. "sentiment": one of positive, negative, neutral
Format your response as a valid JSON array of objects with exactly those keys."""

DOCUMENT_TEMPLATE = "Title: {title}\nURL: {url}\n{body}"

# --- RESUME ANALYSIS PROMPTS ---
RESUME_ANALYSIS_SYSTEM = (
    "You are an expert resume analyst. You will compare a resume against common "
    "Reddit insights and provide personalized feedback. Respond with JSON only."
)

RESUME_ANALYSIS_USER_TEMPLATE = """Here is a resume:

{resume_text}

Here are insights from Reddit discussions about resumes:

{insights_text}

Please provide:
1. Generate 10 specific feedback items for this resume based on the Reddit insights. For each item include:
   - type (improvement, strength, insight, warning, suggestion)
   - title (short descriptive title)
   - section (which resume section this applies to)
   - description (detailed feedback description)
   - source (relevant subreddit if applicable)
2. Calculate scores (0-1 scale) for:
   - overall_score
   - content_score (quality of content)
   - formatting_score (layout and organization)
   - impact_score (effectiveness of achievements)
   - ats_score (how well it works with ATS systems)
Format your response as valid JSON with two properties: 'feedback' (array of feedback objects) and 'scores' (score object)."""

INSIGHT_LINE_TEMPLATE = '- Section: {section}, Category: {category}, Insight: "{insight}", Sentiment: {sentiment}'


def get_prompt(template: str, **kwargs) -> str:
    """Helper to format templates with safety."""
    try:
        return template.format(**kwargs)
    except KeyError as e:
        missing_key = str(e).strip("'")
        raise ValueError(f"Missing template variable: {missing_key}")
