"""Submit eligibility questionnaire use case."""

from app.application.dtos.eligibility import EligibilitySubmission, SubmitEligibilityResult
from app.application.ports.eligibility_lead_repository import EligibilityLeadRepository
from app.application.use_cases.classify_eligibility import ClassifyEligibility


class SubmitEligibilityUseCase:
    """Persist a questionnaire and classify it. No forwarding side effects."""

    def __init__(
        self,
        repository: EligibilityLeadRepository,
        listing_prefix: str = "",
    ) -> None:
        """
        Initialize submit eligibility use case.

        Args:
            repository: Repository for eligibility leads
            listing_prefix: Site slug prepended to the listing target (e.g. 'singmap-')
        """
        self._repository = repository
        self._classifier = ClassifyEligibility()
        self._listing_prefix = listing_prefix

    async def execute(self, submission: EligibilitySubmission) -> SubmitEligibilityResult:
        """
        Execute eligibility submission.

        Args:
            submission: Validated questionnaire

        Returns:
            Stored lead id with classifier result and listing

        Raises:
            PersistenceError: If the lead could not be stored
        """
        lead = await self._repository.create(submission)
        outcome = self._classifier.classify(submission)
        return SubmitEligibilityResult(
            lead_id=lead.id,
            result=outcome.result,
            listing=f"{self._listing_prefix}{outcome.listing}",
        )
