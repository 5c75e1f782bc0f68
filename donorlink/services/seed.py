"""
Demo accounts written into an empty store.

Donor passwords are "123" and the admin password is "admin"; the digests
below are stored as-is.
"""

from donorlink.infrastructure.observability.logging import get_logger
from donorlink.models.domain.person_domain import Person
from donorlink.services.record_store import RecordStore

logger = get_logger(__name__)

DONOR_DIGEST = "202cb962ac59075b964b07152d234b70"
ADMIN_DIGEST = "21232f297a57a5a743894a0e4a801fc3"

DEMO_PEOPLE = [
    {"id": "1672444800000", "name": "Admin User", "email": "admin@example.com", "password": ADMIN_DIGEST, "role": "ADMIN", "phone": "555-555-5555", "city": "AdminCity", "country": "AdminCountry", "bloodGroup": "AB+", "isVerified": True, "contactVisible": False, "isPhoneVerified": True},
    {"id": "1672531200000", "name": "John Doe", "email": "john.doe@example.com", "password": DONOR_DIGEST, "role": "DONOR", "phone": "123-456-7890", "city": "New York", "country": "USA", "bloodGroup": "A+", "lastDonationDate": "2023-10-15", "isVerified": True, "contactVisible": True, "isPhoneVerified": True},
    {"id": "1675209600000", "name": "Jane Smith", "email": "jane.smith@example.com", "password": DONOR_DIGEST, "role": "DONOR", "phone": "234-567-8901", "city": "London", "country": "UK", "bloodGroup": "O-", "isVerified": True, "contactVisible": True, "isPhoneVerified": True},
    {"id": "1677628800000", "name": "Peter Jones", "email": "peter.jones@example.com", "password": DONOR_DIGEST, "role": "DONOR", "phone": "345-678-9012", "city": "New York", "country": "USA", "bloodGroup": "B+", "lastDonationDate": "2024-05-15", "isVerified": True, "contactVisible": False, "isPhoneVerified": True},
    {"id": "1680307200000", "name": "Mary Williams", "email": "mary.williams@example.com", "password": DONOR_DIGEST, "role": "DONOR", "phone": "456-789-0123", "city": "Sydney", "country": "Australia", "bloodGroup": "A+", "lastDonationDate": "2024-01-20", "isVerified": False, "contactVisible": True, "isPhoneVerified": True},
    {"id": "1682899200001", "name": "David Lee", "email": "david.lee@example.com", "password": DONOR_DIGEST, "role": "DONOR", "phone": "567-890-1234", "city": "Toronto", "country": "Canada", "bloodGroup": "AB+", "lastDonationDate": "2023-01-01", "isVerified": True, "contactVisible": True, "isPhoneVerified": True},
]


async def seed_demo_data(record_store: RecordStore) -> bool:
    """Write the demo accounts if the store holds no people. Returns True if seeded."""
    seeded = False

    if not await record_store.list_people():
        people = [Person.model_validate(p) for p in DEMO_PEOPLE]
        await record_store.write_collection(record_store.people_key, people)
        logger.info("Seeded demo people", count=len(people))
        seeded = True

    if not await record_store.has_collection(record_store.messages_key):
        await record_store.write_collection(record_store.messages_key, [])
        logger.info("Initialized empty message collection")
        seeded = True

    return seeded
