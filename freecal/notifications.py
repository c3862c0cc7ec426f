"""
Outgoing user notifications.

No mail transport is wired up yet: messages are written to the structured
log so operators can follow signups, approvals and invitations.
"""

import logging

from .config import ADMIN_EMAIL, FRONTEND_URL

logger = logging.getLogger('freecal.notifications')


def send_email_notification(to: str, subject: str, body: str, type: str) -> bool:
    try:
        logger.info({'msg': 'email_notification', 'type': type, 'to': to, 'subject': subject, 'body': body})
        return True
    except Exception as e:
        logger.warning({'msg': 'email_notification_failed', 'type': type, 'error': str(e)})
        return False


def notify_admin_new_user(email: str, display_name: str) -> bool:
    return send_email_notification(
        ADMIN_EMAIL,
        'New FreeCal signup awaiting approval',
        f'{display_name} ({email}) registered and is waiting for approval.',
        'admin_new_user',
    )


def notify_user_approved(email: str, display_name: str) -> bool:
    return send_email_notification(
        email,
        'Your FreeCal account was approved',
        f'Hi {display_name}, your account is ready. Sign in at {FRONTEND_URL}.',
        'user_approved',
    )


def notify_relationship_request(email: str, requester_name: str) -> bool:
    return send_email_notification(
        email,
        'New connection request',
        f'{requester_name} wants to share calendars with you.',
        'relationship_request',
    )


def notify_event_invitation(email: str, inviter_name: str, event_title: str) -> bool:
    return send_email_notification(
        email,
        f'Invitation: {event_title}',
        f'{inviter_name} invited you to "{event_title}".',
        'event_invitation',
    )


def reset_link(token: str) -> str:
    return f'{FRONTEND_URL}/reset-password?token={token}'


def notify_password_reset(email: str, token: str) -> bool:
    return send_email_notification(
        email,
        'Reset your FreeCal password',
        f'Use this link to choose a new password: {reset_link(token)}',
        'password_reset',
    )
