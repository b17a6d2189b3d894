"""
Test Twilio SMS Integration

Run this script to verify Twilio is configured correctly
and can deliver a verification SMS.

Usage: python scripts/test_twilio.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from phoneverify.core.config import settings
from phoneverify.services.sms_sender import DeliveryFailureKind, TwilioSmsSender, create_sms_sender
from phoneverify.services.verification_service import generate_verification_code
from phoneverify.utils.sms_utils import build_verification_sms, format_e164_number


def check_twilio_config(sender: TwilioSmsSender) -> bool:
    """Test if Twilio is properly configured"""
    print("=" * 60)
    print("  Twilio Configuration Test")
    print("=" * 60 + "\n")

    print(f"Account SID: {settings.TWILIO_ACCOUNT_SID[:10]}..." if settings.TWILIO_ACCOUNT_SID else "Account SID: ❌ Not set")
    print(f"Auth Token: {'✅ Set' if settings.TWILIO_AUTH_TOKEN else '❌ Not set'}")
    print(f"Sender Number: {settings.TWILIO_PHONE_NUMBER}")
    print(f"Country Code: {settings.COUNTRY_CODE}")
    print(f"\nConfiguration valid: {'✅ Yes' if sender.is_configured() else '❌ No'}\n")

    if not sender.is_configured():
        print("⚠️  Please set TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER in .env")
        return False

    return True


async def send_test_code(sender: TwilioSmsSender):
    """Send a verification SMS to a number typed by the operator"""
    print("=" * 60)
    print("  Test Message Sending")
    print("=" * 60 + "\n")

    phone = input("Enter a 10-digit phone number (without country code): ").strip()

    if len(phone) != 10:
        print("❌ Phone number must be exactly 10 digits")
        return

    code = generate_verification_code()
    to_phone = format_e164_number(phone, settings.COUNTRY_CODE)
    print(f"\n📤 Sending test code {code} to {to_phone}...")

    result = await sender.send(to_phone, build_verification_sms(code))

    if result.success:
        print(f"\n✅ Message sent successfully!")
        print(f"Message SID: {result.message_sid}")
        print(f"Status: {result.status}")
    elif result.failure_kind == DeliveryFailureKind.RECIPIENT_UNVERIFIED:
        print(f"\n⚠️  {to_phone} is not verified on this Twilio account.")
        print("   Trial accounts can only send to verified caller IDs.")
    else:
        print(f"\n❌ Failed to send message")
        print(f"Error: {result.error}")


async def main():
    """Run all checks"""
    print("\n🧪 Phone Verify Twilio Integration Test\n")

    sender = create_sms_sender(settings)
    if not isinstance(sender, TwilioSmsSender):
        print("❌ SMS_BACKEND is not 'twilio'; nothing to test.")
        return

    if not check_twilio_config(sender):
        print("\n❌ Configuration test failed. Please fix .env file and try again.")
        return

    test_send = input("\nDo you want to send a test message? (y/n): ")

    if test_send.lower() == 'y':
        await send_test_code(sender)
    else:
        print("\n✅ Configuration test passed!")

    print("\n" + "=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
