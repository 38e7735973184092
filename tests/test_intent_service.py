import pytest

from services.intent_service import classify_query


@pytest.mark.parametrize(
    "question, intent",
    [
        ("show me a summary", "summary"),
        ("Tell me about this file", "summary"),
        ("top 5 highest revenue", "topbottom"),
        ("the 3 lowest scores", "topbottom"),
        ("bottom products", "topbottom"),
        ("average sales", "aggregation"),
        ("which region has the highest sales", "aggregation"),
        ("trend over time", "trend"),
        ("compare north versus south", "comparison"),
        ("show me rows where region is north", "filter"),
        ("xyz abc", "general"),
    ],
)
def test_classify_query(question, intent):
    assert classify_query(question) == intent


def test_first_matching_intent_wins():
    # mentions both a summary and a total
    assert classify_query("Give me an overview of the total") == "summary"


def test_classification_is_case_insensitive():
    assert classify_query("SHOW ME A SUMMARY") == "summary"
