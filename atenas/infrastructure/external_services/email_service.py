"""Outgoing email over SMTP"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from ...core.config import settings

logger = logging.getLogger(__name__)


class EmailService:

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME
        self.frontend_url = settings.FRONTEND_URL

    async def send_email(
        self, to_email: str, subject: str, html_content: str, text_content: Optional[str] = None
    ) -> bool:
        """Send a multipart message; False when SMTP is not configured or delivery fails"""
        if not self.smtp_host:
            logger.warning("SMTP_HOST not set, email to %s not sent: %s", to_email, subject)
            return False

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to_email
        if text_content:
            msg.attach(MIMEText(text_content, 'plain'))
        msg.attach(MIMEText(html_content, 'html'))

        try:
            await self._send_smtp_email(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Error sending email to %s: %s", to_email, e)
            return False
        logger.info("Email sent to %s: %s", to_email, subject)
        return True

    async def _send_smtp_email(self, msg: MIMEMultipart) -> None:
        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.smtp_use_tls:
                    server.starttls()
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # smtplib blocks
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)

    async def send_password_reset_email(self, to_email: str, reset_token: str, name: Optional[str] = None) -> bool:
        reset_url = f"{self.frontend_url}/reset-password?token={reset_token}"
        minutes = settings.PASSWORD_RESET_EXPIRE_MINUTES
        greeting = f"Hola {name}," if name else "Hola,"
        html_content = f"""
        <p>{greeting}</p>
        <p>Recibimos una solicitud para restablecer tu contraseña en Fundación Atenas.</p>
        <p><a href="{reset_url}">Restablecer contraseña</a></p>
        <p>El enlace vence en {minutes} minutos. Si no hiciste esta solicitud, ignora este mensaje.</p>
        """
        text_content = (
            f"{greeting}\n\nPara restablecer tu contraseña abre este enlace:\n{reset_url}\n\n"
            f"El enlace vence en {minutes} minutos."
        )
        return await self.send_email(to_email, "Restablecer contraseña", html_content, text_content)
