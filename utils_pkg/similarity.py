from rapidfuzz.distance import Levenshtein


def name_similarity(a: str, b: str) -> float:
    """Similarity score in [0, 1] between two display names.

    Exact (case-insensitive) match scores 1.0, containment of one name in the
    other 0.8, otherwise normalized Levenshtein similarity.
    """
    s1 = (a or '').strip().lower()
    s2 = (b or '').strip().lower()
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 in s2 or s2 in s1:
        return 0.8
    return Levenshtein.normalized_similarity(s1, s2)


def best_name_match(name: str, candidates, threshold: float):
    """Pick the candidate whose 'name' is most similar to `name`.

    `candidates` is an iterable of dicts with a 'name' key. Returns
    (candidate, score) or (None, 0.0) when nothing reaches `threshold`.
    Ties keep the first candidate seen.
    """
    best = None
    best_score = 0.0
    for cand in candidates:
        score = name_similarity(name, cand.get('name'))
        if score >= threshold and (best is None or score > best_score):
            best = cand
            best_score = score
    return best, best_score
