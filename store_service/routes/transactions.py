# store_service/routes/transactions.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from store_service.db.database import get_db
from store_service.db.schemas import TransactionCreate, TransactionSchema
from store_service.dependencies import get_current_user_id, get_transaction_service
from store_service.services import TransactionService

router = APIRouter(prefix="/api/transaction", tags=["transaction"])


# Checkout: pays every seller from the buyer's funds and empties the cart
@router.post("/", response_model=TransactionSchema, status_code=201)
async def create_transaction(
    body: TransactionCreate,
    user_id: int = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
    db: AsyncSession = Depends(get_db),
):
    return await service.checkout(db, user_id, body.payment_method)
