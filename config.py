"""
Configuration settings for the Restaurant Booking backend
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration"""

    # Flask settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Firebase settings
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH', 'firebase-credentials.json')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID', '')

    # Brevo transactional email settings
    BREVO_API_KEY = os.getenv('BREVO_API_KEY', '')
    BREVO_API_URL = os.getenv('BREVO_API_URL', 'https://api.brevo.com/v3/smtp/email')
    # Single verified sender address, never tenant specific
    DEFAULT_SENDER_EMAIL = os.getenv('DEFAULT_SENDER_EMAIL', 'info@posso.uk')
    DEFAULT_RESTAURANT_NAME = os.getenv('DEFAULT_RESTAURANT_NAME', 'My Restaurant')

    # Langchain settings
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
    OPENAI_BASE_URL = os.getenv('OPENAI_BASE_URL', '')
    WAITLIST_MODEL = os.getenv('WAITLIST_MODEL', 'gpt-4o-mini')

    # Plan limits for the starter subscription
    UPGRADE_BOOKING_LIMIT = int(os.getenv('UPGRADE_BOOKING_LIMIT', '30'))
    UPGRADE_THRESHOLD = int(os.getenv('UPGRADE_THRESHOLD', '25'))
