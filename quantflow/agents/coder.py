"""Strategy Coder Agent for MQL5 Expert Advisors.

Generates MetaTrader 5 Expert Advisor source from a plain-language
description, and repairs existing source given an error message.
"""

import logging
import re
from typing import Optional

from agents import Agent

from quantflow.agents.base import create_agent, get_api_key, run_agent_sync

logger = logging.getLogger(__name__)


STRATEGY_CODER_INSTRUCTIONS = (
    "You are an expert MQL5 developer. Output only raw code. No markdown formatting."
)

MISSING_KEY_CODE = "// API Key missing"

_FENCE_RE = re.compile(r"^```[\w+-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if present.

    Args:
        text: Model output.

    Returns:
        The code without the fence lines.
    """
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


class StrategyCoderAgent:
    """Agent writing and fixing MQL5 Expert Advisor code."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Strategy Coder Agent.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent: Optional[Agent] = None

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = create_agent(
                name="Strategy Coder Agent",
                instructions=STRATEGY_CODER_INSTRUCTIONS,
                model=self.model,
            )
        return self._agent

    def _run(self, prompt: str, empty: str, failed: str) -> str:
        if not get_api_key():
            return MISSING_KEY_CODE

        try:
            output = run_agent_sync(self._get_agent(), prompt)
        except Exception:
            logger.exception("MQL5 code request failed")
            return failed

        code = strip_code_fences(str(output or ""))
        return code or empty

    def generate(self, description: str) -> str:
        """Generate a complete Expert Advisor from a description.

        Args:
            description: What the EA should do.

        Returns:
            MQL5 source, or a ``//`` comment line describing the failure.
        """
        prompt = f"""Generate MQL5 code for a MetaTrader 5 Expert Advisor (EA).
Requirement: {description}
Include imports, OnTick(), and Trade classes.
Ensure the code is complete and compilable."""

        return self._run(prompt, "// Failed to generate code", "// Error generating code")

    def fix(self, code: str, error_description: str) -> str:
        """Fix existing Expert Advisor code or apply a requested change.

        Args:
            code: Current MQL5 source.
            error_description: Compiler error or change request.

        Returns:
            Full corrected MQL5 source, or a ``//`` comment line describing
            the failure.
        """
        prompt = f"""The user has the following MQL5 code:

{code}

They encountered this error or have this request: "{error_description}"

Task: Fix the code or apply the requested changes.
Output: Return ONLY the full corrected MQL5 source code. Do not include markdown blocks or explanations."""

        return self._run(prompt, "// Failed to fix code", "// Error fixing code")
