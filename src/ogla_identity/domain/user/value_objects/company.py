"""Company classification enumerations offered at sign-up."""

from enum import Enum


class CompanyType(str, Enum):
    AGRICULTURE = "Agriculture & Farming"
    FOOD_BEVERAGE = "Food & Beverage"
    COSMETICS = "Cosmetics & Beauty"
    TEXTILES = "Textiles & Fashion"
    HEALTHCARE = "Healthcare & Pharmaceuticals"
    RETAIL = "Retail & Wholesale"
    MANUFACTURING = "Manufacturing"
    EXPORT_IMPORT = "Export/Import"
    HOSPITALITY = "Hospitality & Tourism"
    EDUCATION = "Education"
    TECHNOLOGY = "Technology"
    CONSTRUCTION = "Construction"
    TRANSPORTATION = "Transportation & Logistics"
    ENERGY = "Energy & Utilities"
    OTHER = "Other"


class CompanyRole(str, Enum):
    OWNER = "Owner/CEO"
    MANAGER = "Manager/Director"
    PURCHASING_MANAGER = "Purchasing Manager"
    PROCUREMENT_OFFICER = "Procurement Officer"
    SALES_MANAGER = "Sales Manager"
    MARKETING_MANAGER = "Marketing Manager"
    OPERATIONS_MANAGER = "Operations Manager"
    BUSINESS_DEVELOPMENT = "Business Development"
    CONSULTANT = "Consultant"
    EMPLOYEE = "Employee"
    OTHER = "Other"
