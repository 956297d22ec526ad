"""
SendGrid email service for Travloger.

Sends the transactional emails of the back-office: employee credentials,
lead-assignment introductions (customer <-> agent) and payment links.
Falls back to logging in development when no API key is set.
"""

import logging
from html import escape
from typing import Any, Mapping, Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, HtmlContent, Mail, To

from travloger.config import get_settings

logger = logging.getLogger(__name__)

BRAND = "Travloger"
BRAND_COLOR = "#0F766E"


class EmailService:
    """
    Email service using SendGrid.

    If sendgrid_api_key is empty, emails are logged but not sent,
    allowing local development without a real API key.
    """

    def __init__(self):
        settings = get_settings()
        self.api_key = settings.sendgrid_api_key
        self.from_email = settings.sendgrid_from_email
        self.from_name = settings.sendgrid_from_name
        self.portal_url = settings.frontend_url
        self._client = None

    @property
    def client(self) -> SendGridAPIClient | None:
        """Lazy-init SendGrid client."""
        if self._client is None and self.api_key:
            self._client = SendGridAPIClient(api_key=self.api_key)
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    # ------------------------------------------------------------------
    # Generic sender
    # ------------------------------------------------------------------

    def send_generic(self, to: str, subject: str, html_content: str) -> bool:
        """
        Send a generic email.

        Returns:
            True if the email was sent (or simulated) successfully.
        """
        if not to:
            logger.warning("No recipient for email %r, skipping.", subject)
            return False

        if not self.is_configured:
            logger.warning(
                "SendGrid API key not configured, simulating email send. To=%s Subject=%s",
                to,
                subject,
            )
            return True

        message = Mail(
            from_email=Email(self.from_email, self.from_name),
            to_emails=To(to),
            subject=subject,
            html_content=HtmlContent(html_content),
        )

        try:
            response = self.client.send(message)
            logger.info(
                "Email sent via SendGrid. to=%s subject=%s status=%s",
                to,
                subject,
                response.status_code,
            )
            return True
        except Exception as exc:
            logger.error(
                "Failed to send email via SendGrid. to=%s subject=%s error=%s",
                to,
                subject,
                exc,
            )
            return False

    # ------------------------------------------------------------------
    # Employee credentials
    # ------------------------------------------------------------------

    def send_credentials(
        self,
        name: str,
        email: str,
        password: str,
        login_url: Optional[str] = None,
    ) -> bool:
        """Send the portal login of a newly created employee."""
        subject = f"Welcome to {BRAND} - Your Account Details"
        rows = [
            ("Email", email),
            ("Temporary password", password),
        ]
        body = f"""
      <p style="color:#525252;font-size:15px;margin:0 0 16px;">
        Hello {_escape(name)},<br>
        An employee account has been created for you. Use the details below to sign in.
        You will be asked to change your password at first login.
      </p>
      {_details_table(rows)}
      {_button(login_url or self.portal_url, "Sign in to the portal")}"""
        return self.send_generic(email, subject, _layout("Your account is ready", body))

    # ------------------------------------------------------------------
    # Lead assignment
    # ------------------------------------------------------------------

    def send_employee_details(self, customer: Any, employee: Any) -> bool:
        """Tell a customer which travel expert will handle their enquiry."""
        destination = _get(customer, "destination") or "your trip"
        subject = f"Your Travel Guide Details - {destination} Package"
        rows = [
            ("Name", _get(employee, "name")),
            ("Email", _get(employee, "email")),
            ("Phone", _get(employee, "phone")),
            ("Destination expertise", _get(employee, "destination")),
        ]
        body = f"""
      <p style="color:#525252;font-size:15px;margin:0 0 16px;">
        Dear {_escape(_get(customer, "name"))},<br>
        Thank you for your interest in {_escape(destination)}. Your dedicated travel expert
        will contact you shortly:
      </p>
      {_details_table(rows)}"""
        return self.send_generic(
            _get(customer, "email"),
            subject,
            _layout("Meet your travel expert", body),
        )

    def send_customer_details(self, employee: Any, lead: Any) -> bool:
        """Tell an employee that a lead has been assigned to them."""
        destination = _get(lead, "destination") or "N/A"
        subject = f"New Lead Assignment - {_get(lead, 'name')} ({destination})"
        rows = [
            ("Customer", _get(lead, "name")),
            ("Email", _get(lead, "email")),
            ("Phone", _get(lead, "phone")),
            ("Destination", destination),
            ("Travel dates", _get(lead, "travel_dates")),
            ("Travelers", _get(lead, "number_of_travelers")),
            ("Notes", _get(lead, "custom_notes")),
        ]
        body = f"""
      <p style="color:#525252;font-size:15px;margin:0 0 16px;">
        Hello {_escape(_get(employee, "name"))},<br>
        A new lead has been assigned to you. Please get in touch within 24 hours.
      </p>
      {_details_table(rows)}"""
        return self.send_generic(
            _get(employee, "email"),
            subject,
            _layout("New lead assigned", body),
        )

    # ------------------------------------------------------------------
    # Payment link
    # ------------------------------------------------------------------

    def send_payment_link(
        self,
        member: Mapping[str, Any],
        itinerary: Mapping[str, Any],
        payment: Mapping[str, Any],
    ) -> bool:
        """
        Send the payment link of a booking to the customer.

        Args:
            member: Customer info {name, email, phone, destination, travel_date, travelers}.
            itinerary: Package summary {name, destination, plan_type, hotel?, vehicle?, fixed_plan?}.
            payment: {amount, link}.
        """
        destination = itinerary.get("destination") or member.get("destination") or ""
        subject = f"Your Travel Package - Payment Required | {destination}"

        rows = [
            ("Package", itinerary.get("name")),
            ("Destination", destination),
            ("Plan", itinerary.get("plan_type")),
            ("Travel date", member.get("travel_date")),
            ("Travelers", member.get("travelers")),
        ]
        hotel = itinerary.get("hotel")
        if hotel:
            rows.append(("Hotel", f"{hotel.get('name')} ({hotel.get('category') or 'N/A'})"))
        vehicle = itinerary.get("vehicle")
        if vehicle:
            rows.append(("Vehicle", vehicle.get("type")))
        fixed_plan = itinerary.get("fixed_plan")
        if fixed_plan:
            rows.append(
                (
                    "Fixed plan",
                    f"{fixed_plan.get('adults')} adults x {_format_amount(fixed_plan.get('price_per_person'))}",
                )
            )
        rows.append(("Amount due", _format_amount(payment.get("amount"))))

        body = f"""
      <p style="color:#525252;font-size:15px;margin:0 0 16px;">
        Dear {_escape(member.get("name"))},<br>
        Your travel package is ready. Complete the payment below to confirm your booking.
      </p>
      {_details_table(rows)}
      {_button(payment.get("link"), "Pay now")}"""
        return self.send_generic(
            member.get("email"),
            subject,
            _layout("Payment required", body),
        )


email_service = EmailService()


def get_email_service() -> EmailService:
    """FastAPI dependency returning the email service."""
    return email_service


# ============================================================================
# HTML helpers
# ============================================================================

def _get(obj: Any, name: str) -> Any:
    """Read a field from a model instance or a mapping."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _escape(value: Any) -> str:
    if value is None:
        return ""
    return escape(str(value))


def _format_amount(value: Any) -> str:
    try:
        return f"₹{float(value):,.2f}"
    except (TypeError, ValueError):
        return "-"


def _details_table(rows: list[tuple[str, Any]]) -> str:
    cells = "".join(
        f"""
        <tr>
          <td style="padding:8px 12px;border-bottom:1px solid #eee;color:#525252;font-weight:600;width:40%;">{_escape(label)}</td>
          <td style="padding:8px 12px;border-bottom:1px solid #eee;color:#171717;">{_escape(value)}</td>
        </tr>"""
        for label, value in rows
        if value not in (None, "")
    )
    return f'<table style="width:100%;border-collapse:collapse;font-size:14px;">{cells}\n      </table>'


def _button(url: Optional[str], label: str) -> str:
    if not url:
        return ""
    return f"""
      <div style="margin-top:24px;text-align:center;">
        <a href="{_escape(url)}" style="display:inline-block;padding:12px 28px;background:{BRAND_COLOR};color:#FFFFFF;border-radius:6px;text-decoration:none;font-weight:600;">
          {_escape(label)}
        </a>
      </div>"""


def _layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"></head>
<body style="margin:0;padding:0;font-family:Arial,sans-serif;background:#FAFAFA;">
  <div style="max-width:600px;margin:24px auto;background:#FFFFFF;border-radius:8px;border:1px solid #E5E5E5;overflow:hidden;">
    <div style="background:{BRAND_COLOR};padding:24px 32px;">
      <h1 style="margin:0;color:#FFFFFF;font-size:20px;font-weight:700;">{_escape(title)}</h1>
    </div>
    <div style="padding:24px 32px;">{body}
    </div>
    <div style="padding:16px 32px;background:#F5F5F5;color:#737373;font-size:12px;">
      {BRAND} &middot; This is an automated message.
    </div>
  </div>
</body>
</html>"""
