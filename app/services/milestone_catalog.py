# app/services/milestone_catalog.py
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.milestone_model import MilestoneDefinition

logger = logging.getLogger(__name__)


class CatalogIntegrityViolation(RuntimeError):
    """Catalog thresholds are duplicated or not in ascending order."""


# Canonical list, ascending by day
_CATALOG: List[Dict] = [
    {
        "day": 1,
        "title": "First Day",
        "description": "The hardest step is behind you. Within 24 hours your body starts clearing the substance and your heart rate and blood pressure begin to settle.",
        "reference": "American Heart Association, 'How can I quit smoking?'",
        "link": "https://www.heart.org/en/healthy-living/healthy-lifestyle/quit-smoking-tobacco",
    },
    {
        "day": 3,
        "title": "Three Days",
        "description": "Physical withdrawal usually peaks around now. Cravings are strong but short; each one you ride out weakens the habit loop.",
        "reference": "NHS, 'Withdrawal symptoms'",
        "link": "https://www.nhs.uk/better-health/quit-smoking/",
    },
    {
        "day": 7,
        "title": "One Week",
        "description": "Sleep and mood start to stabilise. People who make it through the first week are several times more likely to stay quit.",
        "reference": "West R. et al., 'Time for a change: putting the Transtheoretical Model to rest', Addiction",
        "link": "https://pubmed.ncbi.nlm.nih.gov/16045599/",
    },
    {
        "day": 14,
        "title": "Two Weeks",
        "description": "Circulation and lung function improve. Energy comes back and daily routines no longer revolve around the habit.",
        "reference": "U.S. Surgeon General, 'Smoking Cessation' report",
        "link": "https://www.hhs.gov/surgeongeneral/reports-and-publications/tobacco/2020-cessation-sgr-factsheet-key-findings/index.html",
    },
    {
        "day": 30,
        "title": "One Month",
        "description": "Brain reward pathways are recalibrating. Concentration, skin and sleep quality noticeably improve.",
        "reference": "Volkow N. et al., 'Neurobiologic Advances from the Brain Disease Model of Addiction', NEJM",
        "link": "https://www.nejm.org/doi/full/10.1056/NEJMra1511480",
    },
    {
        "day": 60,
        "title": "Two Months",
        "description": "New habits are taking hold. Automatic behaviours usually form after about two months of repetition.",
        "reference": "Lally P. et al., 'How are habits formed', European Journal of Social Psychology",
        "link": "https://onlinelibrary.wiley.com/doi/10.1002/ejsp.674",
    },
    {
        "day": 90,
        "title": "Three Months",
        "description": "A major recovery marker. Dopamine receptor availability is much closer to normal and relapse risk drops markedly.",
        "reference": "NIDA, 'Principles of Drug Addiction Treatment'",
        "link": "https://nida.nih.gov/publications/principles-drug-addiction-treatment-research-based-guide-third-edition",
    },
    {
        "day": 180,
        "title": "Six Months",
        "description": "Coughing and shortness of breath decrease and liver and heart markers continue to improve.",
        "reference": "CDC, 'Benefits of Quitting'",
        "link": "https://www.cdc.gov/tobacco/about/benefits-of-quitting.html",
    },
    {
        "day": 365,
        "title": "One Year",
        "description": "A full year. Risk of coronary heart disease is about half that of someone who still uses.",
        "reference": "CDC, 'Benefits of Quitting'",
        "link": "https://www.cdc.gov/tobacco/about/benefits-of-quitting.html",
    },
    {
        "day": 730,
        "title": "Two Years",
        "description": "Stroke risk keeps falling and the habit is now a small part of your story rather than your day.",
        "reference": "WHO, 'Tobacco: health benefits of smoking cessation'",
        "link": "https://www.who.int/news-room/questions-and-answers/item/tobacco-health-benefits-of-smoking-cessation",
    },
    {
        "day": 1825,
        "title": "Five Years",
        "description": "Long-term remission. Risks of several cancers fall substantially compared with continued use.",
        "reference": "WHO, 'Tobacco: health benefits of smoking cessation'",
        "link": "https://www.who.int/news-room/questions-and-answers/item/tobacco-health-benefits-of-smoking-cessation",
    },
]


def _check(entries: Sequence[MilestoneDefinition]) -> Optional[str]:
    seen = set()
    prev = None
    for m in entries:
        if m.day in seen:
            return f"duplicate threshold {m.day}"
        if prev is not None and m.day < prev:
            return f"threshold {m.day} follows {prev}"
        seen.add(m.day)
        prev = m.day
    return None


def load_catalog(
    entries: Optional[Iterable] = None,
    *,
    strict: bool = False,
) -> Tuple[MilestoneDefinition, ...]:
    """
    Build and validate a milestone catalog.

    In strict (debug) mode an out-of-order or duplicate threshold raises
    CatalogIntegrityViolation. Otherwise the catalog is sorted by day and
    duplicate thresholds are dropped, keeping the first occurrence.
    """
    raw = _CATALOG if entries is None else list(entries)
    catalog = [m if isinstance(m, MilestoneDefinition) else MilestoneDefinition(**m) for m in raw]

    problem = _check(catalog)
    if problem is None:
        return tuple(catalog)
    if strict:
        raise CatalogIntegrityViolation(f"Milestone catalog is invalid: {problem}")

    logger.warning("Milestone catalog repaired (%s)", problem)
    repaired: Dict[int, MilestoneDefinition] = {}
    for m in catalog:
        repaired.setdefault(m.day, m)
    return tuple(sorted(repaired.values(), key=lambda m: m.day))
