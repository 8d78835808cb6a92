"""
Prompt text for every model call made by the pipeline.
Section names double as keys in the prompt overrides file.
"""

# ============================================================================
# FEATURE GENERATION
# ============================================================================

GENERATION_SYSTEM_INSTRUCTION = (
    "You are an expert in writing Cucumber features. Generate a feature file based on the "
    "given guidelines. Always include exactly ONE feature tag that matches the provided format."
)

GENERATION_GUIDELINES = """Guidelines for Scenario Generation:
- Write scenarios that describe the BUSINESS OUTCOME, not specific UI interactions
- Use declarative language that focuses on WHAT should happen, not HOW it happens
- Each scenario should represent a distinct business rule or acceptance criterion
- Avoid mentioning specific UI elements or technical implementation details
- Use clear, concise language that describes the expected system behavior
- Scenarios should be understandable by non-technical stakeholders
- When several scenarios start with the same Given steps, move them into a Background section
- IMPORTANT: There should be no empty line between Feature: Title and the story
- IMPORTANT: Include exactly ONE tag at the top of the feature file

Example of Declarative vs Imperative:
Imperative: "When I click the Add User button and enter details"
Declarative: "When a new user is created with valid information\""""

# ============================================================================
# QUALITY ANALYSIS
# ============================================================================

QUALITY_SYSTEM_INSTRUCTION = (
    "You are a BDD expert reviewing Cucumber feature files. Score how well the feature follows "
    "Gherkin best practices and respond with a single JSON object."
)

QUALITY_JSON_SHAPE = """{
  "quality_score": <integer 0-100>,
  "suggestions": ["<concrete improvement>", ...],
  "improved_title": "<better feature title, or omit if the current one is good>"
}"""

# ============================================================================
# COMPLEXITY ANALYSIS
# ============================================================================

COMPLEXITY_SYSTEM_INSTRUCTION = (
    "You are a test automation architect. Estimate the implementation complexity of each "
    "scenario in a Cucumber feature and respond with a single JSON object."
)

COMPLEXITY_FACTORS = """Score each scenario from 1 (trivial) to 10 (very complex) using four factors, each 1-10:
- stepCount: number and length of steps
- dataDependencies: complexity of data inputs, fixtures and external data
- conditionalLogic: amount of branching and conditional behaviour
- technicalDifficulty: overall implementation and automation difficulty"""

COMPLEXITY_JSON_SHAPE = """{
  "overallComplexity": <integer 1-10>,
  "scenarios": [
    {
      "name": "<scenario name>",
      "complexity": <integer 1-10>,
      "factors": {
        "stepCount": <integer>,
        "dataDependencies": <integer>,
        "conditionalLogic": <integer>,
        "technicalDifficulty": <integer>
      },
      "explanation": "<one sentence>"
    }
  ],
  "recommendations": ["<how to reduce complexity>", ...]
}"""

# ============================================================================
# SUGGESTIONS
# ============================================================================

TITLE_SYSTEM_INSTRUCTION = (
    "You are an expert in BDD and product writing. Suggest short, descriptive feature titles "
    "for user stories and respond with a single JSON object."
)

STORY_SYSTEM_INSTRUCTION = (
    "You are an expert in BDD (Behavior-Driven Development) and writing user stories. "
    "Provide brief, actionable suggestions to improve the feature story."
)

# ============================================================================
# PROVIDER-SPECIFIC OUTPUT INSTRUCTIONS
# ============================================================================

JSON_TAG_INSTRUCTION = """<output_instructions>
Return your response as valid JSON wrapped in <json> tags:
<json>
{ ... }
</json>
</output_instructions>"""
