import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import quote

from ogla_config.settings import Settings

logger = logging.getLogger(__name__)

SIGNATURE_TEXT = """If you have any questions, contact us at {support_email}.

Best regards,
The Ogla Team
"""

FOOTER_HTML = """
        <div style="margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
            <p style="color: #6b7280; font-size: 13px; margin: 0;">Questions? Contact us at <a href="mailto:{support_email}">{support_email}</a>.</p>
            <p style="color: #9ca3af; font-size: 13px; margin-top: 8px;">Best regards,<br>The Ogla Team</p>
        </div>
"""

WELCOME_VERIFICATION_SUBJECT = (
    "Welcome to Ogla Shea Butter & General Trading - Please Verify Your Email"
)

WELCOME_VERIFICATION_TEXT = """Hello {first_name},

Welcome to Ogla Shea Butter & General Trading! Your account has been
created for {company_name}.

To complete your registration, verify your email address (valid for {validity}):
{link}

"""

WELCOME_VERIFICATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; background-color: #f9f6f0; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px;">
        <h1 style="color: #8B6914; margin-top: 0;">Welcome to Ogla Shea Butter &amp; General Trading</h1>
        <h2 style="color: #333333;">Hello {first_name},</h2>
        <p style="color: #374151; line-height: 1.6;">We're excited to have you as part of our community. Your account has been successfully created for <strong>{company_name}</strong>.</p>
        <p style="color: #374151; line-height: 1.6;">To complete your registration, please verify your email address:</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{link}" style="display: inline-block; padding: 14px 28px; background-color: #8B6914; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Verify Email Address</a>
        </p>
        <p style="color: #6b7280; font-size: 14px;">This verification link will expire in {validity}. If the button doesn't work, copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #666666; font-size: 14px;">{link}</p>
{footer}
    </div>
</body>
</html>
"""

VERIFICATION_SUBJECT = "Email Verification - Ogla Shea Butter"

VERIFICATION_TEXT = """Hello {first_name},

Please verify your email address to complete your account setup
(valid for {validity}):
{link}

If you didn't create an account with us, you can safely ignore this email.

"""

VERIFICATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; background-color: #f9f6f0; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px;">
        <h1 style="color: #8B6914; margin-top: 0;">Email Verification</h1>
        <h2 style="color: #333333;">Hello {first_name},</h2>
        <p style="color: #374151; line-height: 1.6;">Please verify your email address to complete your account setup.</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{link}" style="display: inline-block; padding: 14px 28px; background-color: #8B6914; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Verify Email Address</a>
        </p>
        <p style="color: #6b7280; font-size: 14px;">This verification link will expire in {validity}. If the button doesn't work, copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #666666; font-size: 14px;">{link}</p>
        <p style="color: #6b7280; font-size: 14px;">If you didn't create an account with us, you can safely ignore this email.</p>
{footer}
    </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Password Reset Request - Ogla Shea Butter"

PASSWORD_RESET_TEXT = """Hello {first_name},

We received a request to reset the password of your Ogla Shea Butter account.

Click the link below to reset your password (valid for {validity}):
{link}

If you didn't request this, you can safely ignore this email.

"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; background-color: #f9f6f0; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px;">
        <h1 style="color: #8B6914; margin-top: 0;">Password Reset Request</h1>
        <h2 style="color: #333333;">Hello {first_name},</h2>
        <p style="color: #374151; line-height: 1.6;">We received a request to reset the password of your Ogla Shea Butter account. If you didn't make this request, you can safely ignore this email.</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{link}" style="display: inline-block; padding: 14px 28px; background-color: #8B6914; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Reset Password</a>
        </p>
        <p style="color: #6b7280; font-size: 14px;">This link will expire in {validity} for security reasons. If the button doesn't work, copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #666666; font-size: 14px;">{link}</p>
{footer}
    </div>
</body>
</html>
"""


def _validity(hours: int) -> str:
    return "1 hour" if hours == 1 else f"{hours} hours"


class EmailService:
    def __init__(self, settings: Settings):
        self._settings = settings

    def verification_link(self, token: str) -> str:
        return f"{self._frontend_url}/verify-email?token={quote(token)}"

    def reset_link(self, token: str) -> str:
        return f"{self._frontend_url}/reset-password?token={quote(token)}"

    @property
    def _frontend_url(self) -> str:
        return self._settings.frontend_base_url.rstrip("/")

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _render(
        self,
        to_email: str,
        subject: str,
        text_template: str,
        html_template: str,
        **values: str,
    ) -> MIMEMultipart:
        support_email = self._settings.support_email
        text_body = text_template.format(**values) + SIGNATURE_TEXT.format(
            support_email=support_email,
        )
        # Names and company come from the registration form
        html_values = {key: html.escape(value) for key, value in values.items()}
        html_body = html_template.format(
            footer=FOOTER_HTML.format(support_email=html.escape(support_email)),
            **html_values,
        )
        return self._create_message(
            to_email=to_email,
            subject=subject,
            text_body=text_body,
            html_body=html_body,
        )

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            return

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise

    def send_welcome_verification_email(
        self,
        to_email: str,
        first_name: str,
        company_name: str,
        token: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping welcome email to %s", to_email)
            return

        message = self._render(
            to_email,
            WELCOME_VERIFICATION_SUBJECT,
            WELCOME_VERIFICATION_TEXT,
            WELCOME_VERIFICATION_HTML,
            first_name=first_name,
            company_name=company_name,
            link=self.verification_link(token),
            validity=_validity(self._settings.email_verification_expire_hours),
        )
        self._send_email(to_email, message)

    def send_verification_email(
        self,
        to_email: str,
        first_name: str,
        token: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping verification email to %s", to_email)
            return

        message = self._render(
            to_email,
            VERIFICATION_SUBJECT,
            VERIFICATION_TEXT,
            VERIFICATION_HTML,
            first_name=first_name,
            link=self.verification_link(token),
            validity=_validity(self._settings.email_verification_expire_hours),
        )
        self._send_email(to_email, message)

    def send_password_reset_email(
        self,
        to_email: str,
        first_name: str,
        token: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping password reset email to %s",
                to_email,
            )
            return

        message = self._render(
            to_email,
            PASSWORD_RESET_SUBJECT,
            PASSWORD_RESET_TEXT,
            PASSWORD_RESET_HTML,
            first_name=first_name,
            link=self.reset_link(token),
            validity=_validity(self._settings.password_reset_expire_hours),
        )
        self._send_email(to_email, message)
