import smtplib
from datetime import datetime
from pathlib import Path
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger
from app.core.config import settings

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def get_template(template_name):
    return _env.get_template(template_name)


# Helper to send email via SMTP
def send_email_via_smtp(to_email, subject, html_content):
    # Only HOST is required. User/Pass are optional (for Mailpit)
    if not settings.SMTP_HOST:
        logger.warning("SMTP host not configured. Skipping email.")
        return

    try:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{settings.EMAILS_FROM_NAME} <{settings.EMAILS_FROM_EMAIL}>"
        msg["To"] = to_email
        msg.attach(MIMEText(html_content, "html"))

        logger.debug(f"Connecting to SMTP: {settings.SMTP_HOST}:{settings.SMTP_PORT}")

        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
            server.ehlo()

            # TLS only on submission ports; Mailpit on 1025 runs plain
            if settings.SMTP_PORT in [587, 2525]:
                server.starttls()
                server.ehlo()

            if settings.SMTP_USER and settings.SMTP_PASSWORD:
                server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)

            server.sendmail(settings.EMAILS_FROM_EMAIL, to_email, msg.as_string())

        logger.info(f"Email sent to {to_email}")
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")


# ---------------------------------------------------------
# 1. SUBMISSION RECEIVED
# ---------------------------------------------------------
def send_submission_received_email(data: dict):
    """
    data requires: name, email, submission_id, service_name, amount
    """
    try:
        template = get_template('submission_received.html')
        context = {
            "name": data.get("name"),
            "submission_id": str(data.get("submission_id")),
            "service_name": data.get("service_name"),
            "amount": data.get("amount"),
            "submission_date": datetime.now().strftime("%d-%m-%Y %I:%M %p"),
            "track_url": f"{settings.FRONTEND_URL}/submissions",
        }
        html_content = template.render(context)
        send_email_via_smtp(data.get("email"), "Submission Received - NYSC Posting Portal", html_content)
    except Exception as e:
        logger.error(f"Error preparing submission email: {e}")


# ---------------------------------------------------------
# 2. SUBMISSION STATUS / PAYMENT UPDATE
# ---------------------------------------------------------
def send_submission_update_email(data: dict):
    """
    data requires: name, email, title, message; optional remarks
    """
    try:
        template = get_template('submission_update.html')
        context = {
            "name": data.get("name"),
            "title": data.get("title"),
            "message": data.get("message"),
            "remarks": data.get("remarks"),
            "update_date": datetime.now().strftime("%d-%m-%Y"),
            "track_url": f"{settings.FRONTEND_URL}/submissions",
        }
        html_content = template.render(context)
        send_email_via_smtp(data.get("email"), data.get("title") or "Submission Update", html_content)
    except Exception as e:
        logger.error(f"Error preparing submission update email: {e}")


# ---------------------------------------------------------
# 3. SUPPORT RESPONSE
# ---------------------------------------------------------
def send_support_response_email(data: dict):
    """
    data requires: email, message_subject, user_message, admin_response;
    optional user_name, subject
    """
    try:
        template = get_template('support_response.html')
        context = {
            "user_name": data.get("user_name"),
            "message_subject": data.get("message_subject"),
            "user_message": data.get("user_message"),
            "admin_response": data.get("admin_response"),
        }
        html_content = template.render(context)
        send_email_via_smtp(
            data.get("email"),
            data.get("subject") or "Response to Your Support Request",
            html_content,
        )
    except Exception as e:
        logger.error(f"Error preparing support response email: {e}")
