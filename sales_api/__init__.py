"""Sales API: reservations, tables and access control for restaurant sales management"""
