"""
Approximate flag-name matching for "did you mean" hints.

jaro() is computed over codepoints:
- match window: max(len_a, len_b) // 2 - 1 (never below 0);
- characters of `a` are matched greedily, left to right, against the first
  unused equal character of `b` inside the window;
- a transposition is counted each time a match lands before the previous
  match in `b`;
- score = mean(m / len_a, m / len_b, (m - t) / m), and 0 when m == 0.

jaro_winkler() adds 0.1 per codepoint of the shared leading run, scaled by the
remaining distance, and never goes above 1.0.
"""

PREFIX_WEIGHT = 0.1
THRESHOLD = 0.8


def jaro(a, b, /):
    if not a or not b:
        return 0.0

    window = max(0, max(len(a), len(b)) // 2 - 1)
    used = [False] * len(b)
    matches = 0
    transpositions = 0
    previous = -1

    for index, char in enumerate(a):
        for pivot in range(max(0, index - window), min(len(b), index + window + 1)):
            if used[pivot] or b[pivot] != char:
                continue
            used[pivot] = True
            matches += 1
            if pivot < previous:
                transpositions += 1
            previous = pivot
            break

    if not matches:
        return 0.0
    return (matches / len(a) + matches / len(b) + (matches - transpositions) / matches) / 3


def jaro_winkler(a, b, /):
    score = jaro(a, b)
    prefix = 0
    for left, right in zip(a, b):
        if left != right:
            break
        prefix += 1
    return min(1.0, score + prefix * PREFIX_WEIGHT * (1.0 - score))


def suggest(candidate, names, /, threshold=THRESHOLD):
    """
    return the name closest to `candidate`, or None when nothing is close enough.

    the first name reaching the best score wins ties; the best score must be at
    least `threshold`.
    """
    best, suggestion = 0.0, None
    for name in names:
        if (score := jaro_winkler(candidate, name)) > best:
            best, suggestion = score, name
    return suggestion if best >= threshold else None


__all__ = (
    "jaro",
    "jaro_winkler",
    "suggest",
)
