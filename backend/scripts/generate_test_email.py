#!/usr/bin/env python3
"""Test email generator for the feed bot.

Builds an email whose body carries subjectId= and message= markers, then
prints it or sends it to the SMTP listener.

Usage:
    # Print the email to stdout
    python scripts/generate_test_email.py --subject-id 0F9000000000001 \
        --message "Hello {005000000000002}"

    # Send via SMTP
    python scripts/generate_test_email.py --subject-id 0F9000000000001 \
        --message "Weekly update" --send --smtp-host localhost --smtp-port 2525

    # HTML-only body
    python scripts/generate_test_email.py --subject-id 005000000000002 \
        --message "Hi" --html
"""

import argparse
import html
import os
import smtplib
import sys
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional


def build_body(subject_id: str, message: str) -> str:
    return f"subjectId={subject_id}\nmessage={message}\n"


def create_email(
    from_email: str,
    to_email: str,
    subject: str,
    body: str,
    as_html: bool = False,
) -> MIMEMultipart:
    """Create the MIME email.

    With as_html the body is sent only as text/html, one paragraph per line.
    """
    msg = MIMEMultipart('alternative')
    msg['From'] = from_email
    msg['To'] = to_email
    msg['Subject'] = subject
    msg['Message-ID'] = f"<test-{os.urandom(8).hex()}@groupmirror-test>"

    if as_html:
        paragraphs = "".join(f"<p>{html.escape(line)}</p>" for line in body.splitlines())
        msg.attach(MIMEText(f"<html><body>{paragraphs}</body></html>", 'html'))
    else:
        msg.attach(MIMEText(body, 'plain'))
    return msg


def send_email(
    msg: MIMEMultipart,
    smtp_host: str = 'localhost',
    smtp_port: int = 2525,
    use_tls: bool = False,
    smtp_user: Optional[str] = None,
    smtp_password: Optional[str] = None,
):
    """Send email via SMTP and report the server's verdict."""
    try:
        with smtplib.SMTP(smtp_host, smtp_port) as smtp:
            if use_tls:
                smtp.starttls()
            if smtp_user and smtp_password:
                smtp.login(smtp_user, smtp_password)
            smtp.send_message(msg)

        print(f"Email sent to {msg['To']} via {smtp_host}:{smtp_port}", file=sys.stderr)

    except smtplib.SMTPException as e:
        print(f"ERROR sending email: {e}", file=sys.stderr)
        sys.exit(1)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Generate test emails for the GroupMirror feed bot',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--subject-id', required=True, help='User or group id to post to')
    parser.add_argument('--message', required=True, help='Feed item text; {id} tokens become mentions')
    parser.add_argument('--from', dest='from_email', default='someone@example.com')
    parser.add_argument('--to', dest='to_email', default='feedbot@groupmirror.local')
    parser.add_argument('--subject', default='Feed post')
    parser.add_argument('--html', action='store_true', help='Send an HTML-only body')

    parser.add_argument('--send', action='store_true', help='Send via SMTP (otherwise print)')
    parser.add_argument('--smtp-host', default='localhost')
    parser.add_argument('--smtp-port', type=int, default=2525)
    parser.add_argument('--smtp-user')
    parser.add_argument('--smtp-password')
    parser.add_argument('--smtp-tls', action='store_true', help='Use STARTTLS')

    args = parser.parse_args()

    msg = create_email(
        from_email=args.from_email,
        to_email=args.to_email,
        subject=args.subject,
        body=build_body(args.subject_id, args.message),
        as_html=args.html,
    )

    if args.send:
        send_email(
            msg,
            smtp_host=args.smtp_host,
            smtp_port=args.smtp_port,
            use_tls=args.smtp_tls,
            smtp_user=args.smtp_user,
            smtp_password=args.smtp_password,
        )
    else:
        print(msg.as_string())


if __name__ == '__main__':
    main()
