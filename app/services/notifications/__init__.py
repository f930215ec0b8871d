"""
Notification Services Module

Provides notification services for outbound channels.
"""

from app.services.notifications.email_notification import SmtpEmailSender

__all__ = ["SmtpEmailSender"]
