#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with tables and staff
"""

import asyncio
import uuid
from datetime import datetime, timedelta

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEMO_TABLE_COUNT = 12


async def seed_demo_data():
    """Seed demo data for development"""
    from tableside.database import SessionLocal, engine, Base
    from tableside.models.restaurant import Restaurant
    from tableside.models.table import RestaurantTable, TableStatus
    from tableside.models.loyalty import LoyaltySettings, DiscountCode, LoyaltyUser
    from tableside.models.user import User, UserRole
    
    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        from sqlalchemy import select
        result = await db.execute(
            select(Restaurant).where(Restaurant.slug == "harbor-bistro")
        )
        existing = result.scalar_one_or_none()
        
        if existing:
            print("Demo data already exists. Skipping...")
            return
        
        print("Creating demo restaurant...")
        
        restaurant = Restaurant(
            id=uuid.uuid4(),
            name="Harbor Bistro",
            slug="harbor-bistro",
            address="42 Pier Road, Portland, ME",
            phone="+12075550142",
            email="hello@harborbistro.example",
        )
        db.add(restaurant)
        await db.flush()
        
        print(f"Created restaurant: {restaurant.name} (ID: {restaurant.id})")
        
        db.add(LoyaltySettings(restaurant_id=restaurant.id))
        
        # Create users
        owner = User(
            restaurant_id=restaurant.id,
            email="owner@harborbistro.example",
            hashed_password=pwd_context.hash("owner123"),
            full_name="Dana Reyes",
            role=UserRole.OWNER,
        )
        db.add(owner)
        
        host = User(
            restaurant_id=restaurant.id,
            email="host@harborbistro.example",
            hashed_password=pwd_context.hash("host123"),
            full_name="Front Desk",
            role=UserRole.STAFF,
        )
        db.add(host)
        
        print("Creating tables...")
        
        for number in range(1, DEMO_TABLE_COUNT + 1):
            db.add(RestaurantTable(
                restaurant_id=restaurant.id,
                table_number=str(number),
                capacity=2 if number <= 4 else 4 if number <= 10 else 8,
                status=TableStatus.AVAILABLE.value,
            ))
        
        print("Creating loyalty data...")
        
        db.add(DiscountCode(
            restaurant_id=restaurant.id,
            code="WELCOME10",
            description="10% off the first order",
            discount_type="percentage",
            discount_value=10,
        ))
        
        now = datetime.utcnow()
        members = [
            ("Sam Ortiz", "+12075550101", 240, 6, 3),
            ("Lee Park", "+12075550102", 85, 2, 45),
            ("Ada Moore", "+12075550103", 410, 11, 1),
        ]
        for name, phone, spent, orders, days_ago in members:
            db.add(LoyaltyUser(
                restaurant_id=restaurant.id,
                name=name,
                phone=phone,
                total_spent=spent,
                order_count=orders,
                discount_eligible=spent >= 100,
                last_order_date=now - timedelta(days=days_ago),
            ))
        
        await db.commit()
        
        print(f"""
Demo data created successfully!

Restaurant: Harbor Bistro
  ID: {restaurant.id}
  Slug: harbor-bistro

Users:
  Owner:
    Email: owner@harborbistro.example
    Password: owner123
  
  Host:
    Email: host@harborbistro.example
    Password: host123

Tables: {DEMO_TABLE_COUNT} created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
