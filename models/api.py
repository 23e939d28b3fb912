from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional


class ProductoEntrada(BaseModel):
    cliente_id: str
    cliente_nombre: Optional[str] = None
    pedido: str = ""
    producto: str = ""
    ancho: float = Field(gt=0)
    alto: float = Field(gt=0)
    peso: float = Field(default=0.0, ge=0)
    cantidad: int = Field(default=1, gt=0)
    tipo: Optional[str] = None
    secuencia: int = 0
    ciudad: str = ""


class DistribucionRequest(BaseModel):
    productos: List[ProductoEntrada]
    configuracion: str = "estandar"


class DistribucionResponse(BaseModel):
    compartimientos: List[Dict[str, Any]]
    pilas_asignadas: List[Dict[str, Any]]
    pilas_no_asignadas: List[Dict[str, Any]]
    resumen: Dict[str, int]
    historia_colocacion: List[Dict[str, Any]] = Field(default_factory=list)
    archivo: Optional[str] = None


class CompartirRequest(BaseModel):
    resumen: Dict[str, Any]
    compartimientos: List[Dict[str, Any]]
    pilas_no_asignadas: List[Dict[str, Any]] = Field(default_factory=list)
    archivo: Optional[str] = None


class CompartirResponse(BaseModel):
    id: str
    url: str


class ApiladasRequest(BaseModel):
    compartimientos: List[Dict[str, Any]]
