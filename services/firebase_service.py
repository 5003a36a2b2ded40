import firebase_admin
from firebase_admin import credentials, auth, db
import datetime
import json

from core.config import settings
from core.logger import get_logger

logger = get_logger(__name__)

DEMO_USER_EMAIL = "demo@smarttrip.com"
DEMO_USER_NAME = "Demo User"

def initialize_firebase():
    """Initializes the Firebase Admin SDK."""
    if firebase_admin._apps:
        return
    if not settings.FIREBASE_SERVICE_ACCOUNT_KEY_JSON:
        logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY_JSON not set; Firebase is not initialized")
        return
    try:
        # The service account key is expected to be a JSON string in the environment variable.
        service_account_info = json.loads(settings.FIREBASE_SERVICE_ACCOUNT_KEY_JSON)

        cred = credentials.Certificate(service_account_info)

        firebase_admin.initialize_app(cred, {
            'databaseURL': settings.FIREBASE_DATABASE_URL
        })
        logger.info("Firebase initialized successfully.")
    except Exception as e:
        # The app keeps serving; database and auth calls will fail until this is fixed.
        logger.error("Error initializing Firebase: %s", e)

def create_user_in_firebase(email, password, full_name):
    """Creates a user in Firebase Auth and stores the profile in the Realtime DB."""
    try:
        user_record = auth.create_user(
            email=email,
            password=password,
            display_name=full_name,
            email_verified=False
        )
    except auth.EmailAlreadyExistsError:
        raise ValueError("The email address is already in use by another account.")

    user_data = {
        'id': user_record.uid,
        'email': user_record.email,
        'name': full_name or user_record.email,
        'created_at': datetime.datetime.utcnow().isoformat()
    }
    db.reference(f'users/{user_record.uid}').set(user_data)
    logger.info("Created user %s", user_record.uid)

    return {
        "uid": user_record.uid,
        "email": user_record.email,
        "full_name": user_record.display_name
    }

def bootstrap_demo_user():
    """
    Returns the first stored user, creating the demo user when the database has none.
    Lets a fresh deployment be explored without going through sign-up.
    """
    users = db.reference('users').order_by_key().limit_to_first(1).get()
    if users:
        user_id, user_data = next(iter(users.items()))
        user_data['id'] = user_id
        return user_data

    new_user_ref = db.reference('users').push()
    user_data = {
        'id': new_user_ref.key,
        'email': DEMO_USER_EMAIL,
        'name': DEMO_USER_NAME,
        'created_at': datetime.datetime.utcnow().isoformat()
    }
    new_user_ref.set(user_data)
    logger.info("Bootstrapped demo user %s", new_user_ref.key)
    return user_data

# Call initialization on module load so Firebase is ready when the app starts.
initialize_firebase()
