"""Parse the evaluator's reply into a score and an explanation."""

from ..models.evaluation import EvaluationResult


def parse_evaluation(content: str) -> EvaluationResult:
    """Split an evaluator reply on its first line break.

    Expected format:
    87%
    The report demonstrates...

    The first line, minus its percent sign and surrounding whitespace, is the
    score. The remaining lines, joined and stripped, are the explanation. A
    single-line reply yields an empty explanation.

    Args:
        content: Text of the first message produced by the run.

    Returns:
        EvaluationResult with score and explanation.
    """
    score_line, _, rest = content.partition("\n")
    score = score_line.replace("%", "", 1).strip()
    explanation = rest.strip()
    return EvaluationResult(score=score, explanation=explanation)
