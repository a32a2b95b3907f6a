from .health_check_service import HealthCheckService
from .scoring_scheduler import ScoringScheduler

__all__ = ["HealthCheckService", "ScoringScheduler"]
