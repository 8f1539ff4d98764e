#!/usr/bin/env python3
"""
Traffic generator for the orders API
Simulates customers registering and placing orders, with a share of invalid
requests and duplicate registrations so every error path shows up in the logs
"""

import requests
import random
import time
import threading
import uuid
from datetime import datetime

API_URL = "http://localhost:3000"

PRODUCTS = ["Widget", "Gadget", "Sprocket", "Gizmo", "Doohickey"]
FIRST_NAMES = ["Ion", "Ana", "Maria", "Andrei", "Elena", "Mihai"]
LAST_NAMES = ["Pop", "Ionescu", "Popescu", "Dumitru", "Stan"]

# Weight for actions
ACTION_WEIGHTS = {
    "place_order": 0.45,
    "view_orders": 0.25,
    "view_users": 0.15,
    "duplicate_register": 0.05,
    "invalid_order": 0.10,
}


def log(message):
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{timestamp}] {message}")


class Customer:
    def __init__(self, customer_id):
        self.customer_id = customer_id
        self.first_name = random.choice(FIRST_NAMES)
        self.last_name = random.choice(LAST_NAMES)
        self.email = f"{self.first_name.lower()}.{uuid.uuid4().hex[:8]}@example.com"
        self.registered = False

    def register(self):
        try:
            response = requests.post(
                f"{API_URL}/api/users",
                json={"name": f"{self.first_name} {self.last_name}", "email": self.email},
                timeout=5
            )
            if response.status_code == 201:
                self.registered = True
                log(f"Customer {self.customer_id}: Registered as user {response.json()['id']}")
                return True
            log(f"Customer {self.customer_id}: Registration failed - {response.status_code} {response.json().get('error')}")
        except Exception as e:
            log(f"Customer {self.customer_id}: Registration error - {e}")
        return False

    def duplicate_register(self):
        """Register again with the same email; the API should answer 409."""
        try:
            response = requests.post(
                f"{API_URL}/api/users",
                json={"name": self.first_name, "email": self.email},
                timeout=5
            )
            log(f"Customer {self.customer_id}: Duplicate registration - {response.status_code}")
            return response.status_code == 409
        except Exception as e:
            log(f"Customer {self.customer_id}: Duplicate registration error - {e}")
        return False

    def order_payload(self):
        return {
            "product": random.choice(PRODUCTS),
            "last_name": self.last_name,
            "first_name": self.first_name,
            "email": self.email,
            "phone": f"07{random.randint(10000000, 99999999)}",
            "address": f"Str. {random.randint(1, 200)}",
            "quantity": random.randint(1, 5),
        }

    def place_order(self):
        payload = self.order_payload()
        try:
            response = requests.post(f"{API_URL}/api/orders", json=payload, timeout=5)
            if response.status_code == 201:
                log(f"Customer {self.customer_id}: Ordered {payload['quantity']} x {payload['product']} - Order {response.json()['orderId']}")
                return True
            log(f"Customer {self.customer_id}: Order failed - {response.status_code}")
        except Exception as e:
            log(f"Customer {self.customer_id}: Order error - {e}")
        return False

    def invalid_order(self):
        """Send an order the API must reject with 400."""
        payload = self.order_payload()
        if random.random() < 0.5:
            del payload[random.choice(list(payload))]
        else:
            payload["quantity"] = random.choice([0, -1, "abc", 2.5])
        try:
            response = requests.post(f"{API_URL}/api/orders", json=payload, timeout=5)
            log(f"Customer {self.customer_id}: Invalid order - {response.status_code} {response.json().get('error')}")
            return response.status_code == 400
        except Exception as e:
            log(f"Customer {self.customer_id}: Invalid order error - {e}")
        return False

    def view_orders(self):
        try:
            response = requests.get(f"{API_URL}/api/orders", timeout=5)
            if response.status_code == 200:
                log(f"Customer {self.customer_id}: Viewing {len(response.json().get('orders', []))} orders")
                return True
        except Exception as e:
            log(f"Customer {self.customer_id}: Failed to view orders - {e}")
        return False

    def view_users(self):
        try:
            response = requests.get(f"{API_URL}/api/users", timeout=5)
            if response.status_code == 200:
                log(f"Customer {self.customer_id}: Viewing {len(response.json().get('users', []))} users")
                return True
        except Exception as e:
            log(f"Customer {self.customer_id}: Failed to view users - {e}")
        return False

    def random_action(self):
        action = random.choices(
            list(ACTION_WEIGHTS.keys()),
            weights=list(ACTION_WEIGHTS.values())
        )[0]
        return getattr(self, action)()


def customer_session(customer_id, duration_seconds):
    """Register once, then act until the session ends."""
    customer = Customer(customer_id)
    end_time = time.time() + duration_seconds

    # ~10% of customers order as guests
    if random.random() >= 0.1:
        customer.register()
        time.sleep(random.uniform(0.2, 0.5))

    while time.time() < end_time:
        customer.random_action()
        time.sleep(random.uniform(0.5, 1.5))


def generate_traffic(num_concurrent_customers=5, session_duration=60):
    """Generate traffic with multiple concurrent customers"""
    log(f"Starting traffic generation with {num_concurrent_customers} concurrent customers")
    log(f"Session duration: {session_duration} seconds")

    threads = []

    try:
        while True:
            while len([t for t in threads if t.is_alive()]) < num_concurrent_customers:
                customer_id = f"customer_{random.randint(1000, 9999)}"
                thread = threading.Thread(
                    target=customer_session,
                    args=(customer_id, session_duration)
                )
                thread.start()
                threads.append(thread)

                time.sleep(random.uniform(1, 3))

            threads = [t for t in threads if t.is_alive()]
            time.sleep(5)

    except KeyboardInterrupt:
        log("\nStopping traffic generation...")
        log("Waiting for active sessions to complete...")
        for thread in threads:
            thread.join(timeout=10)
        log("Traffic generation stopped")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Generate traffic for the orders API")
    parser.add_argument(
        "--customers",
        type=int,
        default=5,
        help="Number of concurrent customers (default: 5)"
    )
    parser.add_argument(
        "--duration",
        type=int,
        default=60,
        help="Session duration in seconds (default: 60)"
    )
    parser.add_argument(
        "--url",
        type=str,
        default="http://localhost:3000",
        help="API URL (default: http://localhost:3000)"
    )

    args = parser.parse_args()
    API_URL = args.url

    log("=" * 60)
    log("Orders API Traffic Generator")
    log("=" * 60)
    log(f"API URL: {API_URL}")
    log(f"Concurrent Customers: {args.customers}")
    log(f"Session Duration: {args.duration}s")
    log("=" * 60)

    generate_traffic(args.customers, args.duration)
