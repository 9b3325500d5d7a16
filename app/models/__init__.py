from .employee import Employee
from .health_metric import HealthMetric
from .work_metric import WorkMetric
from .checkin import FeelingCheckin
from .preference import PersonalPreference
from .life_event import LifeEvent
from .threshold import OrganizationThreshold, EmployeeThresholdOverride
from .consent import ScoringConsent

__all__ = [
    "Employee",
    "HealthMetric",
    "WorkMetric",
    "FeelingCheckin",
    "PersonalPreference",
    "LifeEvent",
    "OrganizationThreshold",
    "EmployeeThresholdOverride",
    "ScoringConsent",
]
