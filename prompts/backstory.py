"""
Backstory prompts.

Used by agents.backstory_agent to score a companion backstory and to write an
improved version of it.
"""

BACKSTORY_EVALUATION_SYSTEM = (
    "You are a professional storytelling and relationship consultant. "
    "Always respond with valid JSON only."
)

BACKSTORY_EVALUATION_PROMPT = """You are an expert storytelling and relationship consultant. Please evaluate this AI companion backstory and provide detailed feedback.

BACKSTORY TO EVALUATE:
{backstory}

Please analyze this backstory on a scale of 1-100 and provide scores for these criteria:
1. DETAIL (1-100): How rich and detailed is the backstory?
2. CONSISTENCY (1-100): How believable and internally consistent is it?
3. EMOTIONAL_DEPTH (1-100): How emotionally rich and connecting is it?
4. UNIQUENESS (1-100): How unique and personal does it feel?

Also provide 3-5 specific suggestions for improvement.

Respond in this exact JSON format:
{{
  "overall": 75,
  "criteria": {{
    "detail": 80,
    "consistency": 70,
    "emotional_depth": 75,
    "uniqueness": 70
  }},
  "suggestions": [
    "Add more specific details about...",
    "Consider elaborating on...",
    "Include more emotional context about..."
  ]
}}"""

FALLBACK_SUGGESTIONS = [
    "Add more specific details about your relationship",
    "Include more emotional context and personal moments",
    "Describe unique quirks and characteristics of your partner",
]

BACKSTORY_IMPROVEMENT_SYSTEM = (
    "You are a creative writer who specializes in character development. "
    "Respond with the improved backstory text only."
)

BACKSTORY_IMPROVEMENT_PROMPT = """You are an expert creative writer specializing in character development and relationship storytelling. Help improve this AI companion backstory to make it more detailed, emotionally rich, and engaging.

CURRENT INFORMATION:
Companion Name: {companion_name}
Companion Gender: {companion_gender}

Current Backstory: {backstory}

Current Relationship Details:
{relationship_details}

Please enhance this backstory by:
1. Adding vivid, specific details that make the relationship feel real and personal
2. Including emotional depth and meaningful moments
3. Creating a cohesive narrative that connects all the elements
4. Adding unique personality quirks and characteristics
5. Describing the living space and daily routines that make it feel authentic

Write an improved, comprehensive backstory that incorporates and expands on the existing information. Make it feel personal, intimate, and realistic. The improved backstory should be 200-400 words and feel like a real relationship story.

Focus on making it emotionally resonant and full of specific details that would help an AI companion understand the relationship dynamics and history."""
