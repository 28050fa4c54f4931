from .engine import DatingDNAEngine
from .errors import (
    ContentConfigurationError,
    DatingDNAError,
    IncompleteAssessmentError,
    InputError,
    ValidationError,
)
from .models import CoupleResult, IndividualResult, Scores, TypeProfile

__version__ = "1.0.0"
