"""
ROI Navigator - Archetype Classification
Six-question profile matched against the 12 archetype profiles.
Score per archetype = sum of (5 - |answer - profile|), max 30.
"""

from engines.archetypes import ARCHETYPES

DIMENSIONS = ['primaryGoal', 'customerFacing', 'dataComplexity', 'processVolume', 'regulatoryBurden', 'technicalTeam']
MAX_SCORE = 5 * len(DIMENSIONS)

CLASSIFICATION_QUESTIONS = [
    {'id': 'primaryGoal', 'label': 'What is the primary goal of this AI initiative?',
     'options': ['Cut costs', 'Improve quality', 'Grow revenue', 'Reduce risk', 'Accelerate speed']},
    {'id': 'customerFacing', 'label': 'How customer-facing is the process?',
     'options': ['Fully internal', 'Mostly internal', 'Mixed', 'Mostly external', 'Fully external']},
    {'id': 'dataComplexity', 'label': 'How complex is the data involved?',
     'options': ['Simple / structured', 'Mostly structured', 'Mixed', 'Mostly unstructured', 'Complex / multi-modal']},
    {'id': 'processVolume', 'label': 'What is the transaction volume?',
     'options': ['Very low', 'Low', 'Moderate', 'High', 'Very high']},
    {'id': 'regulatoryBurden', 'label': 'How heavy is the regulatory burden?',
     'options': ['Minimal', 'Light', 'Moderate', 'Heavy', 'Extreme']},
    {'id': 'technicalTeam', 'label': 'How technical is the team that will own it?',
     'options': ['Non-technical', 'Some technical staff', 'Mixed', 'Strong technical team', 'Expert']},
]

# Profile order matches DIMENSIONS; declaration order breaks ties.
CLASSIFICATION_PROFILES = {
    'internal-process-automation': [1, 1, 2, 5, 2, 2],
    'customer-facing-ai':          [3, 5, 3, 4, 2, 3],
    'data-analytics-automation':   [2, 2, 5, 3, 2, 4],
    'revenue-growth-ai':           [3, 4, 3, 3, 1, 3],
    'risk-compliance-ai':          [4, 1, 3, 4, 5, 3],
    'software-engineering-ai':     [5, 1, 4, 3, 1, 5],
    'hr-talent-ai':                [1, 2, 2, 3, 3, 2],
    'supply-chain-ai':             [1, 2, 4, 5, 2, 3],
    'knowledge-management-ai':     [2, 2, 5, 3, 1, 3],
    'finance-accounting-ai':       [1, 1, 3, 5, 4, 2],
    'legal-contract-ai':           [4, 2, 4, 3, 5, 3],
    'it-operations-aiops':         [5, 1, 4, 5, 2, 5],
}


def _answer(value):
    if value is None:
        return 3
    return min(5, max(1, float(value)))


def classify_archetype(answers, top=3):
    """Rank archetypes by L1 closeness to the answers; missing answers count as 3."""
    answers = answers or {}
    user = [_answer(answers.get(dim)) for dim in DIMENSIONS]
    scored = []
    for arch_id, profile in CLASSIFICATION_PROFILES.items():
        score = sum(5 - abs(u - p) for u, p in zip(user, profile))
        score = int(score) if float(score).is_integer() else round(score, 2)
        scored.append({'id': arch_id, 'label': ARCHETYPES[arch_id]['label'], 'score': score, 'maxScore': MAX_SCORE})
    # sorted() is stable, so equal scores keep declaration order
    return sorted(scored, key=lambda s: -s['score'])[:top]
