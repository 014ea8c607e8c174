"""
HotelDesk - 酒店前台运营服务
房间、客人、预订、入住/退房与账单归档
"""
__version__ = "1.0.0"
