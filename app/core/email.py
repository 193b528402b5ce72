import logging
import smtplib
from email.message import EmailMessage
from app.core.config import get_settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    settings = get_settings()
    return bool(settings.smtp_host and settings.smtp_user and settings.smtp_pass and settings.smtp_from)


def send_email(to_email: str, subject: str, html_body: str):
    settings = get_settings()
    if not smtp_configured():
        raise RuntimeError("SMTP settings are not configured")

    msg = EmailMessage()
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content("This email requires an HTML-capable client.")
    msg.add_alternative(html_body, subtype="html")

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
        server.starttls()
        server.login(settings.smtp_user, settings.smtp_pass)
        server.send_message(msg)
    logger.info("Sent '%s' to %s", subject, to_email)


def send_email_best_effort(to_email: str, subject: str, html_body: str) -> bool:
    """Notifications never fail the operation that triggered them."""
    try:
        send_email(to_email, subject, html_body)
    except Exception as exc:
        logger.warning("Email '%s' to %s not sent: %s", subject, to_email, exc)
        return False
    return True
