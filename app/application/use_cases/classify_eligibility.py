"""Eligibility classification use case."""

from app.application.dtos.eligibility import EligibilityAnswers, EligibilityOutcome


class ClassifyEligibility:
    """Ordered decision list mapping questionnaire answers to an outcome."""

    NOT_CITIZEN = "No, not Singapore Citizens or Permanent Residents"
    MOP_COMPLETED = "Yes, MOP completed"
    WITHIN_MOP = "Yes, still within MOP"
    NO_HDB = "No, do not own any HDB"

    LISTING_APPEAL_MOP = "appeal-mop"
    LISTING_CONGRATULATION = "congratulation"

    def classify(self, answers: EligibilityAnswers) -> EligibilityOutcome:
        """
        Classify a questionnaire. First matching rule wins.

        Args:
            answers: Submitted questionnaire answers

        Returns:
            Result label and listing target; unrecognized ownership
            statuses fall through to disqualification
        """
        if (
            answers.citizenship == self.NOT_CITIZEN
            or answers.requirement == "No"
            or answers.household_income == "No"
            or answers.private_property_ownership == "Yes"
        ):
            return EligibilityOutcome(result="disqualification", listing=self.LISTING_APPEAL_MOP)

        if answers.ownership_status == self.MOP_COMPLETED:
            return EligibilityOutcome(result="congratulation", listing=self.LISTING_CONGRATULATION)

        if answers.ownership_status == self.WITHIN_MOP:
            return EligibilityOutcome(result="mop", listing=self.LISTING_APPEAL_MOP)

        if answers.ownership_status == self.NO_HDB:
            return EligibilityOutcome(result="appeal", listing=self.LISTING_APPEAL_MOP)

        return EligibilityOutcome(result="disqualification", listing=self.LISTING_APPEAL_MOP)


def classify(answers: EligibilityAnswers) -> EligibilityOutcome:
    """Module-level shortcut for ClassifyEligibility().classify."""
    return ClassifyEligibility().classify(answers)
