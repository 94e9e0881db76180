"""
Prompts for AI component generation
"""

DEFAULT_TECHNOLOGIES = "React, Tailwind CSS"

COMPONENT_PROMPT = """Create a UI component. The user's request: "{prompt}"

Technologies to use: {technologies}

Reply in the following JSON format:
{{
    "name": "ComponentName",
    "description": "Short description of the component",
    "code": "// Component code goes here"
}}

The code must be a working React component that uses the listed technologies.
Reply with the JSON only, no extra explanation.
"""


def build_component_prompt(prompt, technologies):
    """Fill the component prompt; an empty technology list means the defaults."""
    tech_string = ", ".join(technologies or [])
    return COMPONENT_PROMPT.format(
        prompt=prompt,
        technologies=tech_string or DEFAULT_TECHNOLOGIES
    )
