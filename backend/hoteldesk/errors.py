"""
领域错误定义
每个核心操作只抛出以下错误之一，请求层据此映射响应码
"""


class HotelError(Exception):
    """领域错误基类"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HotelError):
    """输入格式错误或超出范围（如超出房间容量）"""
    status_code = 400


class NotFoundError(HotelError):
    """引用的房间/客人/预订/账单不存在"""
    status_code = 404


class ConflictError(HotelError):
    """状态冲突：房间不可用、账单重复、房间仍被预订等"""
    status_code = 409


class ConcurrentUpdateError(ConflictError):
    """条件更新影响 0 行：记录在读取之后被并发修改"""


class InternalError(HotelError):
    """持久化层意外故障，不向调用方暴露内部细节"""
    status_code = 500

    def __init__(self, message: str = "Internal error, please retry later"):
        super().__init__(message)
