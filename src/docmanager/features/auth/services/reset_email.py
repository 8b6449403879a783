"""Password reset email content."""

import html

from ....config.constants import PasswordResetLimits
from ..adapters.smtp_mailer import EmailMessage

RESET_EMAIL_SUBJECT = "Password Reset Request - DocManager"

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Password Reset</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .button {{ display: inline-block; padding: 12px 24px; background: #667eea; color: white; text-decoration: none; border-radius: 8px; font-weight: 600; }}
        .footer {{ margin-top: 30px; font-size: 12px; color: #666; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>Password Reset Request</h2>
        <p>Hello,</p>
        <p>We received a request to reset your password. Click the button below to create a new password:</p>
        <p style="text-align: center; margin: 30px 0;">
            <a href="{url}" class="button">Reset Password</a>
        </p>
        <p>Or copy and paste this link in your browser:</p>
        <p style="word-break: break-all; color: #667eea;">{url}</p>
        <p>This link will expire in {minutes} minutes.</p>
        <p>If you didn't request this, please ignore this email or contact support if you have concerns.</p>
        <div class="footer">
            <p>Best regards,<br>The DocManager Team</p>
        </div>
    </div>
</body>
</html>
"""

_TEXT_TEMPLATE = """Password Reset Request

Hello,

We received a request to reset your password. Use the link below to create a new password:

{url}

This link will expire in {minutes} minutes.

If you didn't request this, please ignore this email or contact support if you have concerns.

Best regards,
The DocManager Team
"""


def build_reset_email(to: str, reset_url: str, from_address: str) -> EmailMessage:
    minutes = PasswordResetLimits.TOKEN_EXPIRY_MINUTES
    return EmailMessage(
        to=to,
        subject=RESET_EMAIL_SUBJECT,
        text_body=_TEXT_TEMPLATE.format(url=reset_url, minutes=minutes),
        html_body=_HTML_TEMPLATE.format(url=html.escape(reset_url), minutes=minutes),
        from_address=from_address,
    )
