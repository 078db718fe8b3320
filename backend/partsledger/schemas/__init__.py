from partsledger.schemas.inventory import (
    InventoryResponse,
    InventoryDetailResponse,
    InventoryListResponse,
    InventoryLogResponse,
    InventoryMutationResponse,
    InventoryAdjustRequest,
    InventoryReceiveRequest,
    InventoryShipRequest,
    InventoryCountRequest,
    InventorySettingsUpdate,
    LowStockItem,
    InventorySummary,
)
from partsledger.schemas.order import (
    OrderItemCreate,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
    OrderDetailResponse,
    OrderListResponse,
    OrderSummary,
)
from partsledger.schemas.reorder import (
    ReorderAlertResponse,
    ReorderScanResponse,
    PendingAlertsResponse,
    AlertProcessResult,
    ProcessAllResponse,
    CreateVendorOrdersRequest,
    CreateVendorOrdersResponse,
    ReorderSuggestion,
    VendorSuggestionGroup,
    ReorderSuggestionsResponse,
)
