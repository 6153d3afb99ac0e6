"""
Example schema for demonstration purposes
"""
import os

EXAMPLE_SCHEMA = """-- E-commerce schema
-- Import with: erd-sql import schema.sql --output graph.json

CREATE TABLE accounts (
    id INT PRIMARY KEY,
    account_name VARCHAR(128) NOT NULL,
    email VARCHAR(255) UNIQUE,
    is_admin BOOLEAN DEFAULT FALSE,
    created_at DATETIME
);

CREATE TABLE products (
    id INT PRIMARY KEY,
    account_id INT NOT NULL,
    product_name VARCHAR(100),
    description TEXT,
    price DECIMAL(10,2),
    stock_quantity INT,
    FOREIGN KEY (account_id) REFERENCES accounts(id)
);

/* Orders reference both accounts and products */
CREATE TABLE orders (
    id BIGINT PRIMARY KEY,
    account_id INT NOT NULL,
    product_id INT NOT NULL,
    quantity INT,
    total_amount DECIMAL(10,2),
    status VARCHAR(20),
    order_date TIMESTAMP
);

CREATE TABLE payments (
    id BIGINT PRIMARY KEY,
    order_id BIGINT NOT NULL REFERENCES orders(id),
    payment_method VARCHAR(50),
    amount DECIMAL(10,2),
    processed_at DATETIME
);

ALTER TABLE orders ADD CONSTRAINT fk_orders_account FOREIGN KEY (account_id) REFERENCES accounts(id);
ALTER TABLE orders ADD CONSTRAINT fk_orders_product FOREIGN KEY (product_id) REFERENCES products(id);
"""


def create_example_schema(path='schema.sql'):
    """Write the example schema to ``path`` and return the path"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(EXAMPLE_SCHEMA)

    return path
