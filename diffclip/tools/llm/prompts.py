"""
Prompt management system.

Holds the templates used to turn a diff report into a commit message: one
for the draft turn and one for the optional refine turn.
"""

from dataclasses import dataclass
from typing import Any

COMMIT_SYSTEM_PROMPT = (
    "You are a helpful professional software developer whose role is to "
    "summarise git diffs and turn them into meaningful commit messages. Write "
    "with brevity, clarity, and professionalism, and use correct line endings "
    "and spacing to make it easy to read."
)


@dataclass
class PromptTemplate:
    """
    Prompt template structure.

    Defines reusable prompt templates.
    """

    name: str  # Template name
    system_prompt: str  # System prompt
    user_prompt_template: str  # User prompt template

    def render(self, **kwargs: Any) -> tuple[str, str]:
        """
        Render template into system prompt and user prompt.

        Args:
            **kwargs: Template variable values

        Returns:
            Tuple of (system_prompt, user_prompt)
        """
        try:
            user_prompt = self.user_prompt_template.format(**kwargs)
            return self.system_prompt, user_prompt
        except KeyError as e:
            raise ValueError(f"Missing template variable: {e}") from e


COMMIT_MESSAGE_TEMPLATE = PromptTemplate(
    name="commit_message",
    system_prompt=COMMIT_SYSTEM_PROMPT,
    user_prompt_template="""
As a highly skilled code reviewer, your role is to generate clear, professional, and detailed commit messages based on git diffs. Each commit message should start with a single-line summary that concisely captures the overall intent of the changes, followed by a blank line and then a more detailed explanation where necessary. The detailed section should explain the reason behind the changes, mention any parts of the system that are affected, and note any additional consequences or benefits that might not be immediately obvious from the code changes.

Here is the git diff you need to summarize:
{report}

Please format the commit message with a summary line, followed by a detailed explanation as needed.""",
)

REFINE_TEMPLATE = PromptTemplate(
    name="refine_commit_message",
    system_prompt=COMMIT_SYSTEM_PROMPT,
    user_prompt_template=(
        "Please rewrite the commit message above. Remove any file-by-file "
        "breakdown of the changes, because the version history already records "
        "which files were touched. Keep the single-line summary, the blank line "
        "and the explanation of why the changes were made and what they affect. "
        "Reply with the commit message only."
    ),
)


class PromptManager:
    """
    Prompt template manager.

    Manages prompt templates by name.
    """

    def __init__(self) -> None:
        self._templates: dict[str, PromptTemplate] = {}
        for template in (COMMIT_MESSAGE_TEMPLATE, REFINE_TEMPLATE):
            self.register_template(template)

    def register_template(self, template: PromptTemplate) -> None:
        """Add or replace a template."""
        self._templates[template.name] = template

    def get_template(self, name: str) -> PromptTemplate | None:
        """Return the template registered under `name`."""
        return self._templates.get(name)

