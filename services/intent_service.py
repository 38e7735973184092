import re
from typing import List, Tuple

from models.common_models import Intent

# Evaluated in order, first match wins.
# A numbered ranking ("top 5 highest", "3 lowest") is left to topbottom.
INTENT_PATTERNS: List[Tuple[Intent, "re.Pattern[str]"]] = [
    ("summary", re.compile(r"summary|overview|describe|what.*data|tell me about", re.S)),
    ("trend", re.compile(r"trend|over time|change|growth|decline", re.S)),
    ("comparison", re.compile(r"compare|versus|vs|difference|which.*better", re.S)),
    ("aggregation", re.compile(
        r"total|sum|count|average|max|min|^(?!.*\d.*(?:highest|lowest)).*(?:highest|lowest)", re.S
    )),
    ("filter", re.compile(r"where|when|filter|show.*only|exclude", re.S)),
    ("topbottom", re.compile(r"top|bottom|best|worst|\d+.*highest|\d+.*lowest", re.S)),
]


def classify_query(question: str) -> Intent:
    text = question.lower()
    for intent, pattern in INTENT_PATTERNS:
        if pattern.search(text):
            return intent
    return "general"
