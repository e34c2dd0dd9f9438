import motor.motor_asyncio

from config import settings


client = motor.motor_asyncio.AsyncIOMotorClient(settings.mongo_db_url)
db = client.get_database(settings.db_name)

users_collection = db.get_collection("Users")
product_collection = db.get_collection("Products")
filter_collection = db.get_collection("Filters")
stock_alert_collection = db.get_collection("Stock_Alerts")
