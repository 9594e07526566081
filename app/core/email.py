# app/core/email.py
"""
Email service using Resend for sending transactional emails.

Both senders raise EmailError on failure. Booking and cancellation treat email
as best-effort: they log the error and still report success.
"""
import logging
from html import escape
from typing import Optional

import resend

from app.core.config import settings
from app.core.errors import EmailError

logger = logging.getLogger(__name__)

_STYLE = """
        <style>
            body { font-family: 'Helvetica Neue', Arial, 'Hiragino Kaku Gothic ProN', Meiryo, sans-serif; line-height: 1.6; color: #333; }
            .container { max-width: 600px; margin: 0 auto; padding: 20px; }
            .header { background: #f8f9fa; padding: 30px; border-radius: 8px; margin-bottom: 20px; }
            .content { background: #ffffff; border: 1px solid #e5e7eb; padding: 25px; border-radius: 8px; }
            .notice { background: #fef3c7; border-left: 4px solid #f59e0b; padding: 15px; margin-bottom: 20px; border-radius: 4px; }
            .number { font-size: 18px; font-family: monospace; letter-spacing: 1px; font-weight: bold; }
            .button { display: inline-block; color: #ffffff; text-decoration: none; padding: 10px 20px; border-radius: 6px; font-weight: bold; }
            .survey { background: #eff6ff; border-left: 4px solid #2563eb; padding: 15px; margin: 25px 0; border-radius: 4px; }
            .footer { background: #f9fafb; border-radius: 8px; padding: 20px; font-size: 14px; color: #6b7280; margin-top: 20px; }
        </style>
"""


def init_resend():
    """Initialize Resend with API key."""
    if not settings.RESEND_API_KEY:
        raise EmailError("RESEND_API_KEY is not set")
    resend.api_key = settings.RESEND_API_KEY


def _sender(from_name: Optional[str]) -> str:
    return f"{from_name or settings.EMAIL_FROM_NAME} <{settings.RESEND_FROM_EMAIL}>"


def _footer() -> str:
    return f"""
            <div class="footer">
                <p style="margin: 0 0 10px 0;">このメールアドレスは送信専用です。お問い合わせは以下のメールアドレス宛にお願いいたします。</p>
                <p style="margin: 0;">お問合せ先 {escape(settings.RESEND_FROM_EMAIL)}</p>
            </div>
    """


def _send(params: dict, kind: str) -> dict:
    try:
        response = resend.Emails.send(params)
    except Exception as e:
        logger.error(f"[Email] Failed to send {kind} to {params['to']}: {e}")
        raise EmailError(f"Failed to send {kind}") from e
    logger.info(f"[Email] {kind} sent to {params['to']}")
    return {"success": True, "id": response.get("id") if isinstance(response, dict) else None}


def send_reservation_confirmation(
    to_email: str,
    recipient_name: str,
    seminar_title: str,
    seminar_date: str,
    reservation_number: str,
    manage_url: str,
    pre_survey_url: str = "",
    meet_url: str = "",
    calendar_add_url: str = "",
    top_message: str = "",
    has_pre_survey: bool = True,
    from_name: Optional[str] = None,
) -> dict:
    """
    Send the booking confirmation.

    Args:
        seminar_date: already formatted for display (e.g. 2025年2月15日 14:30)
        manage_url: link to the self-service edit/cancel page
        top_message: shown in a highlighted box above everything else
            (used when an attendee books the same seminar twice)
        has_pre_survey: hide the pre-survey call to action when False

    Returns:
        {"success": True, "id": <resend message id>}
    """
    init_resend()

    notice_html = f'<div class="notice"><p style="margin: 0;">{escape(top_message)}</p></div>' if top_message else ""
    meet_html = (
        f"""<p><strong>参加URL:</strong> <a href="{escape(meet_url)}" class="button" style="background: #2563eb;">参加する</a><br>
                    <span style="font-size: 13px; color: #6b7280;">{escape(meet_url)}</span></p>"""
        if meet_url
        else ""
    )
    calendar_html = (
        f"""<p style="font-size: 14px;">カレンダーに登録すると、リマインドの通知を受け取れます。</p>
                <a href="{escape(calendar_add_url)}" class="button" style="background: #0f766e;">カレンダーに登録</a>"""
        if calendar_add_url
        else ""
    )
    survey_html = (
        f"""<div class="survey">
                    <p style="margin: 0 0 10px 0; font-weight: bold; color: #1e40af;">事前アンケートのお願い</p>
                    <p style="margin: 0 0 15px 0; font-size: 14px;">より充実したセミナーにするため、事前アンケートへのご協力をお願いいたします。</p>
                    <a href="{escape(pre_survey_url)}" class="button" style="background: #2563eb;">事前アンケートに回答する</a>
                </div>"""
        if has_pre_survey and pre_survey_url
        else ""
    )

    html_content = f"""
    <!DOCTYPE html>
    <html lang="ja">
    <head>
        <meta charset="utf-8">
        {_STYLE}
    </head>
    <body>
        <div class="container">
            {notice_html}
            <div class="header">
                <h1 style="color: #2563eb; margin-top: 0; font-size: 24px;">セミナー予約が完了しました</h1>
                <p style="margin-bottom: 0;">{escape(recipient_name)} 様</p>
            </div>
            <div class="content">
                <p>以下のセミナーへのご予約を受け付けました。</p>
                <p><strong>セミナー:</strong> {escape(seminar_title)}</p>
                <p><strong>開催日時:</strong> {escape(seminar_date)}</p>
                <p><strong>予約番号:</strong> <span class="number">{escape(reservation_number)}</span></p>
                {meet_html}
                {calendar_html}

                <p style="font-size: 14px;">お申込み内容の変更やキャンセルには、上記の予約番号が必要となります。</p>
                <a href="{escape(manage_url)}" class="button" style="background: #6b7280;">変更・キャンセル</a>

                {survey_html}
            </div>
            {_footer()}
        </div>
    </body>
    </html>
    """

    params = {
        "from": _sender(from_name),
        "to": [to_email],
        "subject": f"【{seminar_title}】予約完了のお知らせ",
        "html": html_content,
    }
    return _send(params, "reservation confirmation")


def send_cancellation_notification(
    to_email: str,
    recipient_name: str,
    seminar_title: str,
    reservation_number: str,
    from_name: Optional[str] = None,
) -> dict:
    """Send the cancellation notice."""
    init_resend()

    html_content = f"""
    <!DOCTYPE html>
    <html lang="ja">
    <head>
        <meta charset="utf-8">
        {_STYLE}
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1 style="color: #dc2626; margin-top: 0; font-size: 24px;">予約がキャンセルされました</h1>
                <p style="margin-bottom: 0;">{escape(recipient_name)} 様</p>
            </div>
            <div class="content">
                <p>以下のセミナーの予約がキャンセルされました。</p>
                <p><strong>セミナー:</strong> {escape(seminar_title)}</p>
                <p><strong>予約番号:</strong> <span class="number">{escape(reservation_number)}</span></p>
                <p>またのご参加をお待ちしております。</p>
            </div>
            {_footer()}
        </div>
    </body>
    </html>
    """

    params = {
        "from": _sender(from_name),
        "to": [to_email],
        "subject": f"【{seminar_title}】予約キャンセルのお知らせ",
        "html": html_content,
    }
    return _send(params, "cancellation notification")
