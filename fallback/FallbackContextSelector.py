# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: FallbackContextSelector
# -----------------------------------------------------------------------------
import logging
import re
from typing import List

from content.PortfolioContent import Education, Experience, Project, StructuredContent
from utility.logging_utils import get_class_logger

EXPERIENCE_TRIGGERS = ("experience", "work", "job", "role", "position", "summarize", "tell me about")
PROJECT_TRIGGERS = ("project", "built", "app")
EDUCATION_TRIGGERS = ("education", "degree", "university")

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _normalize(text: str) -> str:
    return _NON_ALNUM.sub("", (text or "").lower())


class FallbackContextSelector:
    """
    Keyword-driven context selection over StructuredContent, used when vector
    search is unavailable or returns nothing. Pure: same query and content
    always give the same list.
    """

    def __init__(self, content: StructuredContent, *, max_contexts: int = 10, logger: logging.Logger | None = None):
        self.content = content
        self.max_contexts = max_contexts
        self.logger = logger or get_class_logger(self.__class__)

    def mentions_company(self, query: str) -> bool:
        q = _normalize(query)
        if not q:
            return False
        for exp in self.content.experience:
            company = _normalize(exp.company)
            if company and (company in q or q in company):
                return True
        return False

    def wants_experience(self, query: str) -> bool:
        q = (query or "").lower()
        return any(t in q for t in EXPERIENCE_TRIGGERS) or self.mentions_company(query)

    @staticmethod
    def format_experience(exp: Experience) -> str:
        tags = f" Tags: {', '.join(exp.tags)}" if exp.tags else ""
        responsibilities = " ".join(exp.responsibilities)
        stack = ", ".join(exp.stack)
        impact = (
            f" Impact: {', '.join(f'{k}: {v}' for k, v in exp.impact.items())}"
            if exp.impact else ""
        )
        return f"{exp.role} at {exp.company} ({exp.period}){tags}. {responsibilities} Tech Stack: {stack}.{impact}"

    @staticmethod
    def format_project(project: Project) -> str:
        contribution = f" {project.my_contribution}" if project.my_contribution else ""
        return f"Project: {project.title} - {project.short_description}. Tech: {', '.join(project.tech)}.{contribution}"

    @staticmethod
    def format_education(edu: Education) -> str:
        return (
            f"Education: {edu.degree_level} in {edu.program} from {edu.institution} ({edu.period}). "
            f"Courses: {', '.join(edu.courses)}."
        )

    def select(self, query: str) -> List[str]:
        about = self.content.about
        contact = about.contact
        q = (query or "").lower()

        contexts: List[str] = [f"About {about.name}: {about.bio}"]

        contact_parts = [f"Email: {contact.email}"]
        if contact.phone:
            contact_parts.append(f"Phone: {contact.phone}")
        if contact.linkedin:
            contact_parts.append(f"LinkedIn: {contact.linkedin}")
        if contact.github:
            contact_parts.append(f"GitHub: {contact.github}")
        contexts.append(f"Contact: {', '.join(contact_parts)}")

        contexts.extend(f"{category}: {', '.join(skills)}" for category, skills in about.skills.items())

        if self.wants_experience(query):
            contexts.extend(self.format_experience(e) for e in self.content.experience)

        if any(t in q for t in PROJECT_TRIGGERS):
            contexts.extend(self.format_project(p) for p in self.content.projects)

        if any(t in q for t in EDUCATION_TRIGGERS):
            contexts.extend(self.format_education(e) for e in self.content.education)

        selected = contexts[: self.max_contexts]
        self.logger.debug("Fallback context: assembled=%d returned=%d", len(contexts), len(selected))
        return selected
