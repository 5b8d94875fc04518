import json
import logging
from typing import Optional

from panelgen.prompts.prompt_panel_rules import BASIC_RULES

logger = logging.getLogger(__name__)


def get_prompt(grid_size: int, difficulty: int, example_panels: Optional[list] = None) -> dict:
    logger.debug("Building prompt (grid_size=%d, difficulty=%d, examples=%d)",
                 grid_size, difficulty, len(example_panels or []))

    # harder panels get more elements
    square_count = 2 + difficulty // 2
    hexagon_count = 1 + difficulty // 4

    examples = ""
    if example_panels:
        examples = (
            "Here are panels that players have already solved. Use them as a reference for the format, "
            "but create a new layout:\n"
            f"{json.dumps(example_panels, indent=2)}"
        )

    prompt = {"system_prompt": (
        f"You are a game designer who creates panels based on these rules: {BASIC_RULES}"
        "You provide complete panels together with one valid solution line."
        "You are a JSON generator for a puzzle system. "
        "Return ONLY a valid JSON object conforming to this Pydantic schema: "
        "PanelLLMResponse { grid_size: int, start: PointGenerate, end: PointGenerate, "
        "elements: List[ElementGenerate], solution: List[PointGenerate] }. "
        "Ensure each list is a JSON array ([...]) not an object with numeric keys. "
        "Return no explanations, only raw JSON."
        "For the ElementGenerate schema ONLY use these key names: 'type', 'x', 'y'."),
    "user_prompt": (f"""
        # User Prompt: Generate Panel

        Create a new panel following all the rules and schema definitions provided in the system prompt.
        Make sure the panel is solvable and that the solution you return follows the rules.

        Grid Size: {grid_size}
        Difficulty: {difficulty} of 10
        At least {square_count} black squares, {square_count} white squares and {hexagon_count} hexagons.

        {examples}

        Return only valid JSON for PanelLLMResponse.
        """)
    }
    return prompt
