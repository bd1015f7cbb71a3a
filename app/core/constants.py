"""Core constants: cache key structure, table schemas, and ID prefixes.

Single source of truth for table layout (headers in order) and the
prefix/ID-column pair each entity allocates identifiers from.
"""

# Delimiter for composite cache keys (namespace:vN:key)
CACHE_KEY_SEP = ":"

# Table names
TABLE_SALES = "Sales"
TABLE_CUSTOMERS = "Customers"
TABLE_INVENTORY = "Inventory"
TABLE_SUPPLIERS = "Suppliers"
TABLE_FINANCIALS = "Financials"
TABLE_REFUNDS = "Refunds"

# Identifier prefixes
PREFIX_SALE = "SALE"
PREFIX_CUSTOMER = "CUST"
PREFIX_ITEM = "ITEM"
PREFIX_SUPPLIER = "SUPP"
PREFIX_FINANCIAL = "FIN"
PREFIX_REFUND = "REF"

# Row status values
STATUS_ACTIVE = "Active"
STATUS_COMPLETED = "Completed"
STATUS_REFUNDED = "Refunded"
STATUS_VOIDED = "VOIDED"

# Headers per table; the first column holds the identifier.
TABLE_SCHEMAS: dict[str, tuple[str, ...]] = {
    TABLE_SALES: (
        "Sale_ID",
        "Date",
        "Customer_ID",
        "Item_ID",
        "Quantity",
        "Unit_Price",
        "Total",
        "Payment_Method",
        "Status",
        "Notes",
    ),
    TABLE_CUSTOMERS: (
        "Customer_ID",
        "Name",
        "Email",
        "Phone",
        "City",
        "Total_Purchases",
        "Current_Balance",
        "Last_Purchase_Date",
        "Status",
    ),
    TABLE_INVENTORY: (
        "Item_ID",
        "Item_Name",
        "Category",
        "Price",
        "Cost",
        "Current_Stock",
        "Reorder_Level",
        "Supplier_ID",
        "Status",
        "Last_Updated",
    ),
    TABLE_SUPPLIERS: (
        "Supplier_ID",
        "Name",
        "Contact",
        "Phone",
        "Email",
        "Current_Balance",
        "Status",
    ),
    TABLE_FINANCIALS: (
        "Transaction_ID",
        "Date",
        "Type",
        "Account",
        "Amount",
        "Reference",
        "Description",
        "Status",
    ),
    TABLE_REFUNDS: (
        "Refund_ID",
        "Date",
        "Sale_ID",
        "Quantity",
        "Amount",
        "Reason",
        "Status",
    ),
}

# (id_column, prefix) per table
TABLE_ID_SPECS: dict[str, tuple[str, str]] = {
    TABLE_SALES: ("Sale_ID", PREFIX_SALE),
    TABLE_CUSTOMERS: ("Customer_ID", PREFIX_CUSTOMER),
    TABLE_INVENTORY: ("Item_ID", PREFIX_ITEM),
    TABLE_SUPPLIERS: ("Supplier_ID", PREFIX_SUPPLIER),
    TABLE_FINANCIALS: ("Transaction_ID", PREFIX_FINANCIAL),
    TABLE_REFUNDS: ("Refund_ID", PREFIX_REFUND),
}
