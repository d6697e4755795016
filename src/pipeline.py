"""
Sequential transfer pipeline.

Runs the four dependent Wise calls in order and threads identifiers
from each response into the next request:

1. List profiles -> pick the personal one -> profile id
2. Create quote under the profile -> quote id and payment options
3. Create recipient -> recipient id
4. Create transfer from quote id and recipient id -> transfer id, status

The first failed step stops the run; later calls are never issued.
A quote without a BANK_TRANSFER option is the only non-fatal gap: it
is logged as a warning and the display details are skipped.
"""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable, List, Optional, Protocol

from config.transfer import PAYMENT_METHOD
from src.models import EntityId, PaymentOption, Profile, Quote, Recipient, Transfer
from src.utils.result import FailureKind, StepResult, run_step

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class PipelineValidationError(ValueError):
    """Error raised when a response lacks data the next step needs."""
    pass


# ============================================================
# Protocol (Interface) for the API client
# ============================================================

class TransferAPI(Protocol):
    """
    What the pipeline needs from an API client.

    WiseClient implements it for real; tests pass a fake that records
    calls and returns canned models.
    """

    def list_profiles(self) -> List[Profile]:
        ...

    def create_quote(self, profile_id: EntityId) -> Quote:
        ...

    def create_recipient(self) -> Recipient:
        ...

    def create_transfer(
        self,
        quote_id: str,
        recipient_id: EntityId,
        customer_transaction_id: str
    ) -> Transfer:
        ...


def new_customer_transaction_id() -> str:
    """Generate a fresh idempotency token for one transfer attempt."""
    return str(uuid.uuid4())


@dataclass
class PipelineResult:
    """
    Outcome of one pipeline run.

    Fields for steps that never ran stay None. On failure, failed_step,
    failure and error describe the step that stopped the run.
    """

    success: bool = False
    profile_id: Optional[EntityId] = None
    quote: Optional[Quote] = None
    recipient: Optional[Recipient] = None
    transfer: Optional[Transfer] = None
    customer_transaction_id: Optional[str] = None
    display_lines: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    failure: Optional[FailureKind] = None
    error: Optional[Exception] = None

    def _fail(self, step_result: StepResult) -> "PipelineResult":
        self.success = False
        self.failed_step = step_result.step
        self.failure = step_result.failure
        self.error = step_result.error
        return self


# ============================================================
# Step logic
# ============================================================

def select_personal_profile(profiles: List[Profile]) -> Profile:
    """
    Pick the profile tagged "personal" (any letter case).

    Args:
        profiles: Profiles returned by the API

    Returns:
        The first personal profile

    Raises:
        PipelineValidationError: If the list is empty or has no personal
            profile
    """
    if not profiles:
        raise PipelineValidationError("No profiles returned from API.")

    for profile in profiles:
        if profile.is_personal:
            return profile

    raise PipelineValidationError("No personal profile found.")


def format_decimal(value: Optional[Decimal], places: int) -> str:
    """
    Format a number with a fixed count of decimals, rounding half up.

    Returns "Unknown" when the value is missing. Values that cannot be
    quantized (infinite, or more digits than the decimal context holds)
    are shown as-is.
    """
    if value is None:
        return UNKNOWN
    exponent = Decimal(1).scaleb(-places)
    try:
        return str(value.quantize(exponent, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return str(value)


def describe_payment_option(quote: Quote, option: PaymentOption) -> tuple[List[str], List[str]]:
    """
    Build the informational lines for the chosen payment option.

    Returns:
        Tuple of (display lines, warnings). A missing fee or fee
        currency turns the fee line into a warning.
    """
    lines = []
    warnings = []

    amount = format_decimal(option.target_amount, 2)
    lines.append(f"Recipient will receive: {amount} {option.target_currency or ''}".rstrip())

    lines.append(f"Exchange Rate: {format_decimal(quote.rate, 4)}")

    if option.fee_total is not None and option.source_currency:
        lines.append(f"Total Fee: {format_decimal(option.fee_total, 2)} {option.source_currency}")
    else:
        warnings.append("Fee information is missing or incomplete.")

    lines.append(f"Estimated Delivery: {option.formatted_estimated_delivery or UNKNOWN}")

    return lines, warnings


# ============================================================
# Main TransferPipeline Class (Dependency Injection)
# ============================================================

class TransferPipeline:
    """
    Orchestrates profile -> quote -> recipient -> transfer.

    Example (Production):
        >>> client = WiseClient(Settings.from_env())
        >>> result = TransferPipeline(client).run()
        >>> result.transfer.status_display
        'incoming_payment_waiting'

    Example (Testing):
        >>> pipeline = TransferPipeline(FakeClient(), token_factory=lambda: "token-1")

    Attributes:
        client: Object implementing TransferAPI
        token_factory: Callable returning a new idempotency token; called
            once per transfer attempt
    """

    def __init__(
        self,
        client: TransferAPI,
        token_factory: Callable[[], str] = new_customer_transaction_id
    ):
        self.client = client
        self.token_factory = token_factory

    def run(self) -> PipelineResult:
        """
        Execute all four steps in order.

        Returns:
            PipelineResult; success is False if any step failed, in
            which case no later step was attempted
        """
        result = PipelineResult()

        # Step 1: personal profile
        profile_step = run_step(
            "profile",
            lambda: select_personal_profile(self.client.list_profiles())
        )
        if not profile_step.success:
            return result._fail(profile_step)

        result.profile_id = profile_step.value.id
        self._show(result, f"Profile ID: {result.profile_id}")

        # Step 2: quote
        quote_step = run_step("quote", lambda: self.client.create_quote(result.profile_id))
        if not quote_step.success:
            return result._fail(quote_step)

        quote = result.quote = quote_step.value
        logger.debug(f"Quote: {quote.to_dict()}")
        self._show(result, f"Quote ID: {quote.id}")

        option = quote.find_payment_option(PAYMENT_METHOD)
        if option is None:
            self._warn(result, f"No {PAYMENT_METHOD} option available in quote.")
        else:
            lines, warnings = describe_payment_option(quote, option)
            for line in lines:
                self._show(result, line)
            for warning in warnings:
                self._warn(result, warning)

        # Step 3: recipient
        recipient_step = run_step("recipient", self.client.create_recipient)
        if not recipient_step.success:
            return result._fail(recipient_step)

        result.recipient = recipient_step.value
        self._show(result, f"Recipient ID: {result.recipient.id}")

        # Step 4: transfer, with a fresh idempotency token
        result.customer_transaction_id = self.token_factory()
        transfer_step = run_step(
            "transfer",
            lambda: self.client.create_transfer(
                quote.id,
                result.recipient.id,
                result.customer_transaction_id,
            )
        )
        if not transfer_step.success:
            return result._fail(transfer_step)

        result.transfer = transfer_step.value
        self._show(result, f"Transfer ID: {result.transfer.id}")
        self._show(result, f"Transfer Status: {result.transfer.status_display}")

        result.success = True
        logger.info("All tasks completed successfully.")
        return result

    def _show(self, result: PipelineResult, line: str) -> None:
        logger.info(line)
        result.display_lines.append(line)

    def _warn(self, result: PipelineResult, message: str) -> None:
        logger.warning(message)
        result.warnings.append(message)
