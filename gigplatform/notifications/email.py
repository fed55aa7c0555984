"""
gigplatform/notifications/email.py

Email Notifications

Renders Jinja2 templates and sends them through SendGrid:
- Gig allocation notice to the allocated service provider
- Gig allocation notice to the client who posted the gig

`handle_gig_allocated` is subscribed to the GigAllocated event in main.py and
runs outside the request that allocated the gig, on its own session.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail, To
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from gigplatform.core.config import settings
from gigplatform.database.models import Account
from gigplatform.database.session import AsyncSessionLocal
from gigplatform.gig.models import Gig
from gigplatform.notifications.events import GigAllocated

logger = logging.getLogger(__name__)

jinja_env = Environment(
    loader=FileSystemLoader(settings.mail_templates_path),
    autoescape=select_autoescape(["html", "xml"]),
)


class EmailDeliveryError(Exception):
    """SendGrid rejected the message or is not configured."""


def _render_template(template_name: str, context: dict[str, Any]) -> str:
    """
    Renders an email template using Jinja2 with provided context.
    Args:
        template_name (str): Name of the template file.
        context (dict[str, Any]): Variables to pass to the template.
    Returns:
        str: Rendered HTML content.
    """
    template = jinja_env.get_template(template_name)
    full_context = {
        "year": datetime.now().year,
        "company_name": settings.MAIL_FROM_NAME or settings.APP_NAME,
        "app_name": settings.APP_NAME,
        "base_url": str(settings.BASE_URL).rstrip("/"),
        "support_email": str(settings.SUPPORT_EMAIL),
        **context,
    }
    return template.render(full_context)


async def _send_email(to_email: str, subject: str, html_content: str) -> None:
    """
    Sends an email using SendGrid API.
    Args:
        to_email (str): Recipient's email address.
        subject (str): Email subject line.
        html_content (str): HTML content of the email.
    """
    if not settings.EMAILS_ENABLED:
        logger.warning(f"Email sending disabled. Skipping send to {to_email} for subject '{subject}'")
        return

    if not settings.SENDGRID_API_KEY:
        logger.error("SendGrid API Key setting is missing")
        raise EmailDeliveryError("Email service configuration missing")

    message = Mail(
        from_email=From(email=str(settings.MAIL_FROM), name=settings.MAIL_FROM_NAME or settings.APP_NAME),
        to_emails=To(to_email),
        subject=subject,
        html_content=html_content,
    )
    sg = SendGridAPIClient(settings.SENDGRID_API_KEY)
    response = await asyncio.to_thread(sg.client.mail.send.post, request_body=message.get())
    logger.info(f"Email sent to {to_email} for subject '{subject}' with status code {response.status_code}")
    if response.status_code >= 300:
        logger.error(f"SendGrid API error: Status={response.status_code}, Body={response.body}")
        raise EmailDeliveryError(f"SendGrid returned status {response.status_code}")


def _display_name(account: Account) -> str:
    if account.client_profile is not None:
        return account.client_profile.contact_name
    if account.provider_profile is not None:
        return account.provider_profile.full_name
    return account.username


def build_allocation_context(gig: Gig, client: Account, provider: Account) -> dict[str, Any]:
    return {
        "gig_title": gig.title,
        "gig_description": gig.description,
        "gig_location": gig.location.name if gig.location else "",
        "gig_category": gig.category.name if gig.category else "",
        "start_date": gig.start_date.strftime("%Y-%m-%d"),
        "end_date": gig.end_date.strftime("%Y-%m-%d"),
        "client_name": _display_name(client),
        "client_email": client.email,
        "provider_name": _display_name(provider),
        "provider_email": provider.email,
    }


async def send_gig_allocated_emails(gig: Gig, client: Account, provider: Account) -> None:
    """Notify both parties of an allocation."""
    context = build_allocation_context(gig, client, provider)
    app_name = settings.MAIL_FROM_NAME or settings.APP_NAME

    provider_html = _render_template("gig_allocated_provider.html", context)
    await _send_email(provider.email, f"New Gig Assigned: {gig.title} - {app_name}", provider_html)

    client_html = _render_template("gig_allocated_client.html", context)
    await _send_email(client.email, f"Service Provider Assigned: {gig.title} - {app_name}", client_html)

    logger.info(f"[NOTIFY] Allocation emails processed for gig {gig.id}")


async def handle_gig_allocated(event: GigAllocated) -> None:
    """Event handler: load the allocated gig and its parties, then send both notices."""
    async with AsyncSessionLocal() as db:
        gig = (
            await db.execute(
                select(Gig)
                .where(Gig.id == event.gig_id)
                .options(selectinload(Gig.category), selectinload(Gig.location))
            )
        ).scalar_one_or_none()
        accounts = (
            await db.execute(
                select(Account)
                .where(Account.id.in_([event.client_id, event.provider_id]))
                .options(selectinload(Account.client_profile), selectinload(Account.provider_profile))
            )
        ).scalars().all()

    by_id = {account.id: account for account in accounts}
    client, provider = by_id.get(event.client_id), by_id.get(event.provider_id)
    if gig is None or client is None or provider is None:
        logger.warning(f"[NOTIFY] Skipping allocation email, gig or party missing: {event}")
        return

    await send_gig_allocated_emails(gig, client, provider)
