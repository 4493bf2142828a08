"""Seller mail templates for the withdrawal workflow.

Amounts are rendered in rupees, the currency the marketplace settles in.
"""


class WithdrawRequestTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "Seller")
        return {
            "subject": "Withdraw Request",
            "body": (
                f"Hello {name},\n"
                f"Your withdraw request of ₹{context['gross_amount']:.2f} has been received.\n"
                f"₹{context['amount']:.2f} will be transferred to your bank after "
                f"₹{context['service_charge']:.2f} service tax.\n"
                "Processing time is 3 to 7 business days."
            ),
        }


class PaymentConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "Seller")
        if context.get("status") == "Rejected":
            return {
                "subject": "Withdraw Rejected",
                "body": (
                    f"Hello {name},\n"
                    f"Your withdraw of ₹{context['gross_amount']:.2f} was rejected.\n"
                    "The amount has been returned to your available balance."
                ),
            }
        return {
            "subject": "Payment Confirmation",
            "body": (
                f"Hello {name},\n"
                f"Your withdraw of ₹{context['amount']:.2f} is being processed.\n"
                "Delivery time depends on your bank (usually 3 to 7 days)."
            ),
        }
